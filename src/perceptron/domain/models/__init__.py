"""Domain models - the layer and network engine.

This package contains the numeric core: activation functions, the single
layer with its forward/backward contract and the perceptron that chains
layers and runs the training loop.
"""

from .activations import Activation, get_activation
from .layer import Layer, as_vector
from .perceptron import Perceptron, validate_layer_chain

__all__ = [
    'Activation',
    'get_activation',
    'Layer',
    'as_vector',
    'Perceptron',
    'validate_layer_chain'
]
