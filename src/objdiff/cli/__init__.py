"""
Command line interface for objdiff.
"""

from .main import cli, main

__all__ = ["cli", "main"]
