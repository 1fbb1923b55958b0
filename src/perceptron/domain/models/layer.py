"""Single computational layer with forward and backward passes.

A forward call and the backward call that follows it form one logical
transaction: ``compute`` fills the layer's last-forward slot and the next
backward call consumes it. The slot is not thread-safe or re-entrant.
"""
from typing import Iterable, NamedTuple, Optional, Union

import torch

from perceptron.domain.entities.layer_config import LayerConfig
from perceptron.domain.exceptions import LayerStateError, ShapeMismatchError
from perceptron.domain.models.activations import get_activation

DTYPE = torch.float64

VectorLike = Union[torch.Tensor, Iterable[float]]


def as_vector(values: VectorLike) -> torch.Tensor:
    """Convert a tensor or number sequence into a fresh 1-D float64 tensor."""
    if isinstance(values, torch.Tensor):
        vector = values.detach().to(DTYPE).clone()
    else:
        vector = torch.tensor(list(values), dtype=DTYPE)
    if vector.dim() != 1:
        raise ShapeMismatchError(f"Expected a 1-D vector, got shape {tuple(vector.shape)}")
    return vector


class _ForwardState(NamedTuple):
    """Values cached by the last forward call for the next backward call."""
    inputs: torch.Tensor  # inputs with the bias 1.0 appended
    pre_activation: torch.Tensor
    activation: torch.Tensor


class Layer:
    """Fully connected layer owning a ``(outputs, inputs + 1)`` weight tensor.

    The last weight column multiplies a constant 1.0 input and acts as the
    bias of each unit.
    """

    def __init__(self, config: LayerConfig):
        """Initialize the layer with uniformly random weights.

        Args:
            config: Layer construction parameters
        """
        self._config = config
        self._activation = get_activation(config.activation)
        generator = torch.Generator()
        if config.seed is not None:
            generator.manual_seed(config.seed)
        else:
            generator.seed()
        uniform = torch.rand(config.weight_shape, generator=generator, dtype=DTYPE)
        self._weights = (uniform * 2.0 - 1.0) * config.init_scale
        self._last_forward: Optional[_ForwardState] = None

    def __repr__(self) -> str:
        return (f"Layer(inputs={self._config.inputs}, outputs={self._config.outputs}, "
                f"activation={self._config.activation})")

    @property
    def config(self) -> LayerConfig:
        """The configuration this layer was built from."""
        return self._config

    @property
    def has_pending_forward(self) -> bool:
        return self._last_forward is not None

    def compute(self, inputs: VectorLike) -> torch.Tensor:
        """Apply the affine transform and activation to one input vector.

        Args:
            inputs: Vector of size ``config.inputs``

        Returns:
            Activated output vector of size ``config.outputs``

        Raises:
            ShapeMismatchError: If the input size is wrong
        """
        x = as_vector(inputs)
        if x.shape[0] != self._config.inputs:
            raise ShapeMismatchError(
                f"Layer expects {self._config.inputs} inputs, got {x.shape[0]}"
            )
        augmented = torch.cat((x, torch.ones(1, dtype=DTYPE)))
        z = self._weights @ augmented
        a = self._activation.function(z)
        self._last_forward = _ForwardState(augmented, z, a)
        return a.clone()

    def compute_output_backward(self, errors: VectorLike) -> torch.Tensor:
        """Backward step of the output layer.

        Args:
            errors: Per-unit error ``target - prediction``

        Returns:
            Gradient signal for the layer below
        """
        return self._backward(errors)

    def compute_hidden_backward(self, signal: VectorLike) -> torch.Tensor:
        """Backward step of a hidden layer.

        Args:
            signal: Gradient-signal sum returned by the layer above

        Returns:
            Gradient signal for the layer below
        """
        return self._backward(signal)

    def _backward(self, upstream: VectorLike) -> torch.Tensor:
        if self._last_forward is None:
            raise LayerStateError("Backward pass requested before a forward pass")
        signal = as_vector(upstream)
        if signal.shape[0] != self._config.outputs:
            raise ShapeMismatchError(
                f"Layer expects a signal of size {self._config.outputs}, got {signal.shape[0]}"
            )
        state = self._last_forward
        self._last_forward = None

        delta = signal * self._activation.derivative(state.pre_activation, state.activation)
        # Propagate through the pre-update weights, bias column excluded.
        propagated = self._weights[:, :-1].T @ delta
        self._weights += self._config.learning_rate * torch.outer(delta, state.inputs)
        return propagated

    def get_weights(self) -> torch.Tensor:
        """Return a copy of the full weight tensor."""
        return self._weights.clone()

    def set_weights(self, weights: Union[torch.Tensor, Iterable[Iterable[float]]]) -> None:
        """Replace the full weight tensor with exact copies of the given values.

        Raises:
            ShapeMismatchError: If the shape differs from ``config.weight_shape``
        """
        if isinstance(weights, torch.Tensor):
            tensor = weights.detach().to(DTYPE).clone()
        else:
            tensor = torch.tensor([list(row) for row in weights], dtype=DTYPE)
        if tuple(tensor.shape) != self._config.weight_shape:
            raise ShapeMismatchError(
                f"Expected weights of shape {self._config.weight_shape}, got {tuple(tensor.shape)}"
            )
        self._weights = tensor
        self._last_forward = None
