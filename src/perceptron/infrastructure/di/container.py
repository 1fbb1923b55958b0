"""Dependency injection container for clean component wiring."""
from typing import Any, Dict, List

from perceptron.domain.entities.layer_config import LayerConfig
from perceptron.domain.entities.training_config import TrainingConfiguration
from perceptron.domain.repositories.model_repository import ModelRepository
from perceptron.domain.services.training_service import TrainingService
from perceptron.infrastructure.config.config_loader import DataConfig
from perceptron.infrastructure.repositories.json_model_repository import JsonModelRepository


class Container:
    """Simple dependency injection container.

    Provides centralized component wiring and dependency management,
    following the Dependency Inversion Principle.
    """

    def __init__(self):
        """Initialize container with empty service registry."""
        self._services: Dict[str, Any] = {}
        self._configs: Dict[str, Any] = {}

    def register_configs(self, layer_configs: List[LayerConfig],
                         training_config: TrainingConfiguration,
                         data_config: DataConfig) -> None:
        """Register configuration objects.

        Args:
            layer_configs: Network layer chain
            training_config: Convergence policy
            data_config: Data and model locations
        """
        self._configs.update({
            'layers': layer_configs,
            'training': training_config,
            'data': data_config
        })

    def get_model_repository(self) -> ModelRepository:
        """Get model repository instance (singleton pattern)."""
        if 'model_repo' not in self._services:
            self._services['model_repo'] = JsonModelRepository()
        return self._services['model_repo']

    def get_training_service(self) -> TrainingService:
        """Get training service instance (singleton pattern)."""
        if 'training_service' not in self._services:
            # Import here to avoid circular dependencies
            from perceptron.application.services.perceptron_training_service import PerceptronTrainingService
            data_config = self._configs.get('data')
            if data_config is None:
                raise ValueError("Data configuration not registered")

            self._services['training_service'] = PerceptronTrainingService(
                model_repo=self.get_model_repository(),
                model_dir=data_config.model_dir
            )
        return self._services['training_service']

    def get_config(self, config_name: str) -> Any:
        """Get registered configuration by name.

        Args:
            config_name: Name of configuration ('layers', 'training', 'data')

        Returns:
            Configuration object

        Raises:
            KeyError: If configuration not found
        """
        if config_name not in self._configs:
            raise KeyError(f"Configuration '{config_name}' not registered")
        return self._configs[config_name]

    def clear_services(self) -> None:
        """Clear service registry (useful for testing)."""
        self._services.clear()
