"""Tests for the single layer forward/backward contract."""
import pytest
import torch

from perceptron.domain.entities.layer_config import LayerConfig
from perceptron.domain.exceptions import LayerStateError, ShapeMismatchError
from perceptron.domain.models.layer import Layer, as_vector


def _vec(*values):
    return torch.tensor(values, dtype=torch.float64)


@pytest.fixture
def linear_layer():
    """Identity-activated layer with weights [[1, 2 | 0.5]]."""
    layer = Layer(LayerConfig(inputs=2, outputs=1, activation='identity', learning_rate=0.1))
    layer.set_weights([[1.0, 2.0, 0.5]])
    return layer


class TestAsVector:
    """Test cases for vector conversion."""

    def test_from_list(self):
        vector = as_vector([1, 2, 3])

        assert vector.dtype == torch.float64
        assert torch.equal(vector, _vec(1.0, 2.0, 3.0))

    def test_tensor_is_copied(self):
        source = _vec(1.0, 2.0)
        vector = as_vector(source)
        vector[0] = 5.0

        assert source[0] == 1.0

    def test_rejects_matrices(self):
        with pytest.raises(ShapeMismatchError):
            as_vector(torch.zeros(2, 2))


class TestLayerConstruction:
    """Test cases for layer initialization."""

    def test_weight_shape(self):
        """Test that weights have one bias column."""
        layer = Layer(LayerConfig(inputs=3, outputs=4))

        assert layer.get_weights().shape == (4, 4)
        assert layer.config.inputs == 3

    def test_seeded_initialization_is_reproducible(self):
        """Test that equal seeds produce equal weights."""
        config = LayerConfig(inputs=3, outputs=2, seed=42)

        assert torch.equal(Layer(config).get_weights(), Layer(config).get_weights())

    def test_initialization_respects_scale(self):
        """Test that initial weights lie inside the init range."""
        layer = Layer(LayerConfig(inputs=10, outputs=10, init_scale=0.25, seed=3))

        assert layer.get_weights().abs().max() <= 0.25

    def test_repr(self):
        layer = Layer(LayerConfig(inputs=3, outputs=2, activation='tanh'))

        assert repr(layer) == "Layer(inputs=3, outputs=2, activation=tanh)"


class TestLayerForward:
    """Test cases for Layer.compute."""

    def test_affine_transform_with_bias(self, linear_layer):
        """Test that the last weight column acts as bias."""
        output = linear_layer.compute([1.0, 1.0])

        assert torch.allclose(output, _vec(3.5))

    def test_output_size(self):
        """Test that the output has one value per unit."""
        layer = Layer(LayerConfig(inputs=3, outputs=5, seed=1))

        output = layer.compute([0.1, 0.2, 0.3])

        assert output.shape == (5,)
        assert torch.all((output > 0) & (output < 1))

    def test_wrong_input_size(self, linear_layer):
        """Test shape validation of the input."""
        with pytest.raises(ShapeMismatchError):
            linear_layer.compute([1.0, 2.0, 3.0])
        assert linear_layer.has_pending_forward is False

    def test_forward_caches_state(self, linear_layer):
        """Test that a forward call opens a backward transaction."""
        linear_layer.compute([1.0, 1.0])

        assert linear_layer.has_pending_forward is True


class TestLayerBackward:
    """Test cases for the backward passes."""

    def test_output_backward_updates_weights(self, linear_layer):
        """Test signal and weight update for a single linear unit."""
        linear_layer.compute([1.0, 2.0])

        signal = linear_layer.compute_output_backward([1.0])

        # Signal uses the pre-update weights without the bias column
        assert torch.allclose(signal, _vec(1.0, 2.0))
        assert torch.allclose(linear_layer.get_weights(), torch.tensor([[1.1, 2.2, 0.6]], dtype=torch.float64))

    def test_hidden_backward_scales_by_derivative(self):
        """Test that the upstream signal is multiplied by the local derivative."""
        layer = Layer(LayerConfig(inputs=1, outputs=1, activation='sigmoid', learning_rate=1.0))
        layer.set_weights([[0.0, 0.0]])
        layer.compute([2.0])

        signal = layer.compute_hidden_backward([4.0])

        # sigmoid'(0) = 0.25, delta = 1.0; the incoming weight was 0
        assert torch.allclose(signal, _vec(0.0))
        assert torch.allclose(layer.get_weights(), torch.tensor([[2.0, 1.0]], dtype=torch.float64))

    def test_zero_error_leaves_weights_unchanged(self, linear_layer):
        """Test that a perfect prediction does not move the weights."""
        before = linear_layer.get_weights()
        linear_layer.compute([0.3, 0.7])

        linear_layer.compute_output_backward([0.0])

        assert torch.equal(linear_layer.get_weights(), before)

    def test_backward_before_forward_fails(self, linear_layer):
        """Test fail-fast on a missing forward pass."""
        with pytest.raises(LayerStateError):
            linear_layer.compute_output_backward([1.0])
        with pytest.raises(LayerStateError):
            linear_layer.compute_hidden_backward([1.0])

    def test_forward_state_is_consumed(self, linear_layer):
        """Test that one forward pass allows exactly one backward pass."""
        linear_layer.compute([1.0, 1.0])
        linear_layer.compute_output_backward([0.5])

        with pytest.raises(LayerStateError):
            linear_layer.compute_output_backward([0.5])

    def test_wrong_signal_size(self, linear_layer):
        """Test shape validation of the backward signal."""
        before = linear_layer.get_weights()
        linear_layer.compute([1.0, 1.0])

        with pytest.raises(ShapeMismatchError):
            linear_layer.compute_output_backward([1.0, 1.0])
        assert torch.equal(linear_layer.get_weights(), before)


class TestLayerWeights:
    """Test cases for bulk weight access."""

    def test_get_weights_returns_copy(self, linear_layer):
        weights = linear_layer.get_weights()
        weights[0, 0] = 100.0

        assert linear_layer.get_weights()[0, 0] == 1.0

    def test_set_weights_preserves_exact_values(self):
        """Test that values are stored without renormalization."""
        layer = Layer(LayerConfig(inputs=2, outputs=2))
        weights = torch.tensor([[0.1 + 0.2, 1e-300, -3.0], [123456.789, -0.0, 7.25]], dtype=torch.float64)

        layer.set_weights(weights)

        assert torch.equal(layer.get_weights(), weights)

    def test_set_weights_wrong_shape(self, linear_layer):
        with pytest.raises(ShapeMismatchError):
            linear_layer.set_weights([[1.0, 2.0]])
        with pytest.raises(ShapeMismatchError):
            linear_layer.set_weights(torch.zeros(2, 3, dtype=torch.float64))

    def test_set_weights_clears_pending_forward(self, linear_layer):
        linear_layer.compute([1.0, 1.0])
        linear_layer.set_weights([[0.0, 0.0, 0.0]])

        assert linear_layer.has_pending_forward is False
