"""Domain services - Training business logic interfaces.

This package defines abstract interfaces for the training workflow,
following the Service Layer pattern.
"""

from .training_service import (
    TrainingExample,
    TrainingResult,
    TrainingService,
    TrainingStatus
)

__all__ = [
    'TrainingExample',
    'TrainingResult',
    'TrainingService',
    'TrainingStatus'
]
