"""Layer configuration entity - immutable description of one layer."""
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

ACTIVATIONS = ('sigmoid', 'tanh', 'relu', 'identity')


@dataclass(frozen=True)
class LayerConfig:
    """Construction parameters of a single computational layer.

    The raw network input is not a layer, so a network of N computational
    layers is described by N configs. A config is never mutated once a
    layer has been built from it.

    Attributes:
        inputs: Number of inputs the layer accepts
        outputs: Number of output units (neurons)
        activation: Activation function selector (see ``ACTIVATIONS``)
        learning_rate: Step size of the per-example weight update
        init_scale: Half-width of the uniform weight initialization range
        seed: Optional seed for reproducible weight initialization
    """
    inputs: int
    outputs: int
    activation: str = 'sigmoid'
    learning_rate: float = 0.1
    init_scale: float = 0.5
    seed: Optional[int] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        if isinstance(self.inputs, bool) or not isinstance(self.inputs, int) or self.inputs <= 0:
            raise ValueError("inputs must be a positive integer")
        if isinstance(self.outputs, bool) or not isinstance(self.outputs, int) or self.outputs <= 0:
            raise ValueError("outputs must be a positive integer")
        if self.activation not in ACTIVATIONS:
            raise ValueError(f"activation must be one of {', '.join(ACTIVATIONS)}")
        if self.learning_rate <= 0:
            raise ValueError("learning_rate must be positive")
        if self.init_scale <= 0:
            raise ValueError("init_scale must be positive")

    @property
    def weight_shape(self) -> tuple:
        """Shape of the weight tensor, one bias column included."""
        return (self.outputs, self.inputs + 1)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LayerConfig':
        """Build a config from a mapping, rejecting unknown keys."""
        return cls(**data)
