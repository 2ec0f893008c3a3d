"""
Library module: the reader's liked books.
"""

from .factory import create_library_module

__all__ = ["create_library_module"]
