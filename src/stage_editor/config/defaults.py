"""Starter .stage-editor.toml template."""

CONFIG_FILENAME = ".stage-editor.toml"

DEFAULT_TOML = """\
# stage-editor configuration
version = "1.0"

[editor]
patterns = []                 # globs, or /regex/ when starting with '/'; empty = all files
write = true                  # false: run the command but never touch the index
update_working_tree = true    # patch the working copy after updating the index

[command]
# run = "black -q {}"         # {} is replaced by the staged file's temp path

[output]
format = "terminal"           # terminal | json
show_summary = true
"""
