"""Tests for infrastructure configuration management."""
import pytest

from perceptron.domain.entities.layer_config import LayerConfig
from perceptron.domain.entities.training_config import TrainingConfiguration
from perceptron.domain.exceptions import ShapeMismatchError
from perceptron.infrastructure.config import ConfigLoader as ConfigLoaderImport
from perceptron.infrastructure.config.config_loader import ConfigLoader, DataConfig, LayerConfigModel


class TestDataConfig:
    """Test cases for DataConfig."""

    def test_data_config_creation(self):
        config = DataConfig(train_path="data/xor.yaml", model_dir="out")

        assert config.train_path == "data/xor.yaml"
        assert config.model_dir == "out"

    def test_data_config_defaults(self):
        config = DataConfig()

        assert config.train_path is None
        assert config.model_dir == "models"

    def test_assignment_is_validated(self):
        config = DataConfig()

        config.model_dir = "elsewhere"
        assert config.model_dir == "elsewhere"
        with pytest.raises(ValueError):
            config.model_dir = ["not", "a", "string"]


class TestLayerConfigModel:
    """Test cases for the YAML layer entry model."""

    def test_defaults_match_entity(self):
        entry = LayerConfigModel(inputs=2, outputs=1)

        assert LayerConfig(**entry.model_dump()) == LayerConfig(inputs=2, outputs=1)

    def test_unknown_keys_rejected(self):
        with pytest.raises(ValueError):
            LayerConfigModel(inputs=2, outputs=1, dropout=0.5)


class TestConfigLoader:
    """Test cases for ConfigLoader."""

    @pytest.fixture
    def sample_config_yaml(self):
        """Sample YAML configuration content."""
        return """
network:
  layers:
    - {inputs: 2, outputs: 3, activation: tanh, learning_rate: 0.5, seed: 1}
    - inputs: 3
      outputs: 1
      activation: sigmoid
      learning_rate: 0.25
      init_scale: 0.1

training:
  threshold: 1e-3
  max_epochs: 5000
  log_every: 100

data:
  train_path: "data/xor.yaml"
  model_dir: "models"
"""

    def test_config_loader_creation(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        loader = ConfigLoader(config_file)

        assert loader.config_path == config_file
        assert ConfigLoaderImport is ConfigLoader

    def test_load_yaml_file_not_found(self, tmp_path):
        loader = ConfigLoader(tmp_path / "nonexistent.yaml")

        with pytest.raises(FileNotFoundError):
            loader.load_layer_configs()

    def test_load_yaml_invalid_yaml(self, tmp_path):
        config_file = tmp_path / "invalid.yaml"
        config_file.write_text("invalid: yaml: content: [")

        with pytest.raises(ValueError):
            ConfigLoader(config_file).load_training_config()

    def test_non_mapping_document(self, tmp_path):
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- 1\n- 2\n")

        with pytest.raises(ValueError, match="mapping"):
            ConfigLoader(config_file).load_data_config()

    def test_load_layer_configs(self, tmp_path, sample_config_yaml):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(sample_config_yaml)

        configs = ConfigLoader(config_file).load_layer_configs()

        assert configs == [
            LayerConfig(inputs=2, outputs=3, activation='tanh', learning_rate=0.5, seed=1),
            LayerConfig(inputs=3, outputs=1, activation='sigmoid', learning_rate=0.25, init_scale=0.1)
        ]

    def test_inconsistent_layer_chain(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("""
network:
  layers:
    - {inputs: 3, outputs: 4}
    - {inputs: 5, outputs: 2}
""")

        with pytest.raises(ShapeMismatchError):
            ConfigLoader(config_file).load_layer_configs()

    def test_missing_layers(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("training:\n  threshold: 0.01\n")

        with pytest.raises(ValueError):
            ConfigLoader(config_file).load_layer_configs()

    def test_invalid_layer_entry(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("network:\n  layers:\n    - {inputs: 2, outputs: 1, activation: softmax}\n")

        with pytest.raises(ValueError, match="activation"):
            ConfigLoader(config_file).load_layer_configs()

    def test_load_training_config_coerces_numbers(self, tmp_path, sample_config_yaml):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(sample_config_yaml)

        config = ConfigLoader(config_file).load_training_config()

        assert isinstance(config, TrainingConfiguration)
        assert config.threshold == 0.001
        assert config.max_epochs == 5000
        assert config.log_every == 100

    def test_training_defaults(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("training:\n  max_epochs: null\n")

        config = ConfigLoader(config_file).load_training_config()

        assert config == TrainingConfiguration()

    def test_null_training_values_use_defaults(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("training:\n  threshold: null\n  log_every: null\n")

        config = ConfigLoader(config_file).load_training_config()

        assert config.threshold == 0.001
        assert config.log_every == 0

    def test_load_all_configs(self, tmp_path, sample_config_yaml):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(sample_config_yaml)

        configs = ConfigLoader(config_file).load_all_configs()

        assert set(configs) == {'layers', 'training', 'data'}
        assert len(configs['layers']) == 2
        assert configs['data'].train_path == "data/xor.yaml"

    def test_validate_config_file(self, tmp_path, sample_config_yaml):
        good = tmp_path / "good.yaml"
        good.write_text(sample_config_yaml)
        bad = tmp_path / "bad.yaml"
        bad.write_text("key: [unclosed")

        assert ConfigLoader(good).validate_config_file() is True
        assert ConfigLoader(bad).validate_config_file() is False
        assert ConfigLoader(tmp_path / "missing.yaml").validate_config_file() is False

    def test_config_schema(self, tmp_path):
        schema = ConfigLoader(tmp_path / "config.yaml").get_config_schema()

        assert 'inputs' in schema['network.layers[]']
        assert 'threshold' in schema['training']
        assert 'model_dir' in schema['data']
