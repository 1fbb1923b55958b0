"""Activation functions and their derivatives.

Each derivative receives both the pre-activation ``z`` and the activation
``a = f(z)`` so that sigmoid and tanh can reuse the cached forward value.
"""
from typing import Callable, Dict, NamedTuple

import torch


class Activation(NamedTuple):
    """An activation function paired with its local derivative."""
    function: Callable[[torch.Tensor], torch.Tensor]
    derivative: Callable[[torch.Tensor, torch.Tensor], torch.Tensor]


def _sigmoid_derivative(z: torch.Tensor, a: torch.Tensor) -> torch.Tensor:
    return a * (1.0 - a)


def _tanh_derivative(z: torch.Tensor, a: torch.Tensor) -> torch.Tensor:
    return 1.0 - a * a


def _relu_derivative(z: torch.Tensor, a: torch.Tensor) -> torch.Tensor:
    return (z > 0).to(z.dtype)


def _identity_derivative(z: torch.Tensor, a: torch.Tensor) -> torch.Tensor:
    return torch.ones_like(z)


_REGISTRY: Dict[str, Activation] = {
    'sigmoid': Activation(torch.sigmoid, _sigmoid_derivative),
    'tanh': Activation(torch.tanh, _tanh_derivative),
    'relu': Activation(torch.relu, _relu_derivative),
    'identity': Activation(lambda z: z.clone(), _identity_derivative),
}


def get_activation(name: str) -> Activation:
    """Look up an activation by its config selector.

    Raises:
        ValueError: If the name is not a known activation
    """
    try:
        return _REGISTRY[name]
    except KeyError:
        raise ValueError(f"Unknown activation: {name}") from None
