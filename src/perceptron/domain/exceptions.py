"""Error taxonomy shared by every layer of the package."""


class PerceptronError(Exception):
    """Base class for all perceptron errors."""


class ShapeMismatchError(PerceptronError, ValueError):
    """A vector or layer chain disagrees with the expected dimensionality."""


class ModelFormatError(PerceptronError, ValueError):
    """Persisted model content does not decode into the expected schema."""


class LayerStateError(PerceptronError, RuntimeError):
    """A backward pass was requested without a pending forward pass."""
