"""Configuration management infrastructure - Type-safe YAML configuration loading."""
import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional
from pydantic import BaseModel, ConfigDict

from perceptron.domain.entities.layer_config import LayerConfig
from perceptron.domain.entities.training_config import TrainingConfiguration
from perceptron.domain.models.perceptron import validate_layer_chain


class LayerConfigModel(BaseModel):
    """One entry of ``network.layers`` with validation."""
    model_config = ConfigDict(extra='forbid')

    inputs: int
    outputs: int
    activation: str = 'sigmoid'
    learning_rate: float = 0.1
    init_scale: float = 0.5
    seed: Optional[int] = None


class DataConfig(BaseModel):
    """Data configuration with validation."""
    model_config = ConfigDict(validate_assignment=True)

    train_path: Optional[str] = None
    model_dir: str = 'models'


class ConfigLoader:
    """YAML configuration loader with validation and type safety.

    Reads the ``network``, ``training`` and ``data`` sections of a single
    YAML file and turns them into domain entities.
    """

    def __init__(self, config_path: Path):
        """Initialize configuration loader.

        Args:
            config_path: Path to YAML configuration file
        """
        self.config_path = config_path

    def load_layer_configs(self) -> List[LayerConfig]:
        """Load and validate the layer chain.

        Raises:
            ValueError: If a layer entry is invalid or the chain is inconsistent
        """
        config_data = self._load_yaml()
        layers_data = (config_data.get('network') or {}).get('layers') or []
        if not isinstance(layers_data, list):
            raise ValueError("network.layers must be a list")

        configs = [LayerConfig(**LayerConfigModel(**entry).model_dump()) for entry in layers_data]
        validate_layer_chain(configs)
        return configs

    def load_training_config(self) -> TrainingConfiguration:
        """Load and validate training configuration."""
        config_data = self._load_yaml()
        training_data = dict(config_data.get('training') or {})

        # Coerce numeric fields that might come as strings in some YAML scenarios
        # (e.g. "1e-3" is parsed as a string by PyYAML)
        if training_data.get('threshold') is not None:
            training_data['threshold'] = float(training_data['threshold'])
        for k in ('max_epochs', 'log_every'):
            if training_data.get(k) is not None:
                training_data[k] = int(training_data[k])
        training_data = {k: v for k, v in training_data.items() if v is not None}

        return TrainingConfiguration(**training_data)

    def load_data_config(self) -> DataConfig:
        """Load and validate data configuration."""
        config_data = self._load_yaml()
        data_data = config_data.get('data') or {}
        return DataConfig(**data_data)

    def load_all_configs(self) -> Dict[str, Any]:
        """Load all configurations at once."""
        return {
            'layers': self.load_layer_configs(),
            'training': self.load_training_config(),
            'data': self.load_data_config()
        }

    def _load_yaml(self) -> Dict[str, Any]:
        """Load raw YAML data with error handling."""
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}")
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError("Configuration file must contain a mapping")
        return data

    def validate_config_file(self) -> bool:
        """Validate that configuration file can be loaded and parsed."""
        try:
            self._load_yaml()
            return True
        except (OSError, ValueError):
            return False

    def get_config_schema(self) -> Dict[str, Any]:
        """Get configuration schema for documentation."""
        return {
            'network.layers[]': LayerConfig.__annotations__,
            'training': TrainingConfiguration.__annotations__,
            'data': DataConfig.__annotations__
        }
