# CLI package
"""
hcisnoop CLI package.
"""

from .main import cli

__all__ = ['cli']
