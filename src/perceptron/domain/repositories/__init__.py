"""Domain repository interfaces.

This package defines abstract interfaces for data access, following the
Repository pattern so the engine does not depend on a storage format.
"""

from .model_repository import ModelRepository, ModelInfo

__all__ = [
    'ModelRepository',
    'ModelInfo'
]
