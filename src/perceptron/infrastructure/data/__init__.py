"""Training data infrastructure."""

from .training_set_loader import TrainingExampleModel, load_training_set

__all__ = ['TrainingExampleModel', 'load_training_set']
