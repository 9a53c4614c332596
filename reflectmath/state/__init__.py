"""
State management for reflection-token holders
"""

from .shares import ShareTable

__all__ = [
    "ShareTable",
]
