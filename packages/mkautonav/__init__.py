"""mkautonav - Navigation and sidebar generation for documentation trees.

This package turns a directory of markdown documents into ordered nav and
sidebar configuration, honouring per-item settings and frontmatter.
"""

from __future__ import annotations

__version__ = "0.1.0"

# Export main CLI app for entry point
from mkautonav.cli import app

__all__ = ["__version__", "app"]
