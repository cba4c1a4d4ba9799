"""Compiled template objects ready for rendering."""

from simplejinja.template.core import Template

__all__ = ["Template"]
