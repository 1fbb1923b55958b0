"""Model snapshot entities - the persistable state of a network."""
from dataclasses import dataclass, field
from datetime import timedelta
from typing import List

import torch

from .layer_config import LayerConfig


@dataclass
class LayerParameters:
    """One layer's configuration together with its full weight tensor."""
    config: LayerConfig
    weights: torch.Tensor


@dataclass
class ModelSnapshot:
    """Everything needed to rebuild a trained network.

    Attributes:
        last_error: Epoch cost at the end of the most recent training run
        last_learning_time: Wall-clock duration of that run
        parameters: Per-layer configs and weights, input layer first
    """
    last_error: float = 0.0
    last_learning_time: timedelta = field(default_factory=timedelta)
    parameters: List[LayerParameters] = field(default_factory=list)

    @property
    def layer_configs(self) -> List[LayerConfig]:
        return [p.config for p in self.parameters]
