"""Reporters for edit results."""
