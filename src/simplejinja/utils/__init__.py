"""Helpers shared by the parser, renderer and diagnostics."""
