"""Command-line interface module for loose-xml.

This module provides the ``loose-xml`` tool for checking, re-formatting and
tokenizing entity definition files.
"""

from .main import main

__all__ = ["main"]
