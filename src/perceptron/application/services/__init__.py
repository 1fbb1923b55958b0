"""Application services - Concrete implementations of domain service interfaces."""

from .perceptron_training_service import PerceptronTrainingService

__all__ = [
    'PerceptronTrainingService'
]
