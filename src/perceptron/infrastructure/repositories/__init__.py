"""Infrastructure layer repository implementations.

This package contains concrete implementations of repository interfaces
using specific storage formats.
"""

from .json_model_repository import JsonModelRepository

__all__ = [
    'JsonModelRepository'
]
