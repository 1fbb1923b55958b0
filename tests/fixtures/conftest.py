"""Test fixtures for unit testing."""
import pytest
import torch
from unittest.mock import Mock

from perceptron.domain.entities.layer_config import LayerConfig
from perceptron.domain.entities.training_config import TrainingConfiguration


@pytest.fixture
def sample_layer_configs():
    """Seeded 2-3-1 sigmoid network configuration."""
    return [
        LayerConfig(inputs=2, outputs=3, activation='sigmoid', learning_rate=0.5, seed=1),
        LayerConfig(inputs=3, outputs=1, activation='sigmoid', learning_rate=0.5, seed=2)
    ]


@pytest.fixture
def or_layer_config():
    """Single sigmoid unit able to learn the OR gate."""
    return LayerConfig(inputs=2, outputs=1, activation='sigmoid', learning_rate=2.0, seed=0)


@pytest.fixture
def or_training_set():
    """Truth table of logical OR."""
    return [
        (torch.tensor([0.0, 0.0], dtype=torch.float64), torch.tensor([0.0], dtype=torch.float64)),
        (torch.tensor([0.0, 1.0], dtype=torch.float64), torch.tensor([1.0], dtype=torch.float64)),
        (torch.tensor([1.0, 0.0], dtype=torch.float64), torch.tensor([1.0], dtype=torch.float64)),
        (torch.tensor([1.0, 1.0], dtype=torch.float64), torch.tensor([1.0], dtype=torch.float64)),
    ]


@pytest.fixture
def xor_training_set():
    """Truth table of logical XOR as plain lists."""
    return [
        ([0.0, 0.0], [0.0]),
        ([0.0, 1.0], [1.0]),
        ([1.0, 0.0], [1.0]),
        ([1.0, 1.0], [0.0]),
    ]


@pytest.fixture
def sample_training_config():
    """Bounded training configuration for testing."""
    return TrainingConfiguration(threshold=0.01, max_epochs=20000, log_every=0)


@pytest.fixture
def mock_model_repo():
    """Mock model repository for testing."""
    repo = Mock()
    repo.save.return_value = "model20250101_120000_000000.json"
    repo.model_exists.return_value = True
    repo.list_models.return_value = []
    repo.find_latest_model.return_value = None
    return repo
