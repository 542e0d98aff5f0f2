"""Bundled data files for aksctl."""
