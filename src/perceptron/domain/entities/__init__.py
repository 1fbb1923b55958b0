"""Domain entities - Core business objects.

This package contains the fundamental entities that describe a network
and its training:

- LayerConfig: Construction parameters of one computational layer
- TrainingConfiguration: Convergence policy of a training run
- ModelSnapshot / LayerParameters: Persistable state of a trained network
"""

from .layer_config import LayerConfig, ACTIVATIONS
from .training_config import TrainingConfiguration
from .model_snapshot import LayerParameters, ModelSnapshot

__all__ = [
    'ACTIVATIONS',
    'LayerConfig',
    'TrainingConfiguration',
    'LayerParameters',
    'ModelSnapshot'
]
