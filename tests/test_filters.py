"""Tests for glob / regex path filters."""

from pathlib import Path

import pytest

from stage_editor.filters import PatternError, compile_pattern, path_matches, pattern_matches


class TestGlob:
    def test_star_crosses_directories(self):
        assert pattern_matches("*.txt", "/repo/sub/a.txt")

    def test_no_match(self):
        assert not pattern_matches("*.txt", "/repo/a.md")

    def test_case_sensitive(self):
        assert not pattern_matches("*.TXT", "/repo/a.txt")

    def test_character_class(self):
        assert pattern_matches("*/[ab].py", "/repo/a.py")


class TestRegex:
    def test_delimited(self):
        assert pattern_matches(r"/\.py$/", "/repo/main.py")
        assert not pattern_matches(r"/\.py$/", "/repo/main.pyc")

    def test_flags(self):
        assert pattern_matches(r"/README/i", "/repo/readme.md")

    def test_escaped_slashes(self):
        regex = compile_pattern(r"/^\/docs\//")
        assert regex.search("/docs/readme.md")

    def test_missing_closing_delimiter(self):
        with pytest.raises(PatternError):
            compile_pattern("/unterminated")

    def test_invalid_body(self):
        with pytest.raises(PatternError):
            compile_pattern("/([a-z/")

    def test_unknown_modifier(self):
        with pytest.raises(PatternError):
            compile_pattern("/abc/q")


class TestPathMatches:
    root = Path("/repo")

    def test_empty_matches_all(self):
        assert path_matches("/repo/anything.bin", [])

    def test_any_pattern(self):
        assert path_matches("/repo/a.md", ["*.txt", "*.md"])

    def test_root_anchored_regex(self):
        patterns = [r"/^\/docs\//"]
        assert path_matches("/repo/docs/readme.md", patterns, root=self.root)
        assert not path_matches("/repo/a.txt", patterns, root=self.root)

    def test_absolute_regex_still_works(self):
        assert path_matches("/repo/docs/readme.md", [r"/^\/repo\/docs\//"], root=self.root)

    def test_path_outside_root(self):
        assert path_matches("/elsewhere/a.txt", ["*.txt"], root=self.root)
        assert not path_matches("/elsewhere/a.txt", [r"/^\/a/"], root=self.root)

    def test_short_circuits_before_bad_pattern(self):
        # the broken regex is never compiled because the glob matched first
        assert path_matches("/repo/a.txt", ["*.txt", "/broken"])

    def test_bad_pattern_reached(self):
        with pytest.raises(PatternError):
            path_matches("/repo/a.md", ["*.txt", "/broken"])

    def test_directory_glob_matches_relative_path(self):
        assert path_matches("/repo/docs/readme.md", ["docs/*.md"], root=self.root)
        assert not path_matches("/repo/src/readme.md", ["docs/*.md"], root=self.root)

    def test_directory_glob_needs_root(self):
        assert not path_matches("/repo/docs/readme.md", ["docs/*.md"])
