"""
Recommendations module: smart and explore lists, daily pick and reading paths.
"""

from .factory import create_recommendations_module

__all__ = ["create_recommendations_module"]
