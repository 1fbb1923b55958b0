"""Backpropagation implementation of the training service."""
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from perceptron.domain.entities.layer_config import LayerConfig
from perceptron.domain.entities.training_config import TrainingConfiguration
from perceptron.domain.models.perceptron import Perceptron, validate_layer_chain
from perceptron.domain.repositories.model_repository import ModelRepository
from perceptron.domain.services.training_service import (
    TrainingExample,
    TrainingResult,
    TrainingService
)

logger = logging.getLogger(__name__)


class PerceptronTrainingService(TrainingService):
    """Concrete training service around ``Perceptron.train_back_prop``.

    Builds or loads a network, trains it with the configured stopping
    policy and persists the result into the model directory.
    """

    def __init__(self, model_repo: ModelRepository, model_dir: Union[str, Path] = 'models'):
        """Initialize the training service.

        Args:
            model_repo: Repository used to save and load networks
            model_dir: Directory receiving trained models
        """
        self.model_repo = model_repo
        self.model_dir = Path(model_dir)
        self.network: Optional[Perceptron] = None
        self._last_result: Optional[TrainingResult] = None

    def train_model(self, layer_configs: List[LayerConfig],
                    training_config: TrainingConfiguration,
                    training_set: Sequence[TrainingExample]) -> TrainingResult:
        """Build a fresh network from the layer chain and train it."""
        self.validate_configuration(layer_configs, training_config)
        network = Perceptron(*layer_configs, repository=self.model_repo)
        return self._train_and_save(network, training_config, training_set)

    def resume_training(self, model_path: Path,
                        training_config: TrainingConfiguration,
                        training_set: Sequence[TrainingExample]) -> TrainingResult:
        """Continue training a persisted network."""
        if not self.model_repo.model_exists(model_path):
            raise FileNotFoundError(f"Model not found: {model_path}")

        network = Perceptron.from_model(model_path, repository=self.model_repo)
        logger.info(f"Resuming from {model_path} (last error {network.last_error})")
        return self._train_and_save(network, training_config, training_set)

    def validate_configuration(self, layer_configs: List[LayerConfig],
                               training_config: TrainingConfiguration) -> None:
        """Validate the layer chain and training configuration."""
        validate_layer_chain(layer_configs)

        threshold = getattr(training_config, 'threshold', None)
        if threshold is None or threshold <= 0:
            raise ValueError("threshold must be positive")

        max_epochs = getattr(training_config, 'max_epochs', None)
        if max_epochs is not None and max_epochs <= 0:
            raise ValueError("max_epochs must be positive")

    def get_training_status(self) -> Dict[str, Any]:
        """Get last run outcome and saved model information."""
        models = self.model_repo.list_models(self.model_dir) if self.model_dir.is_dir() else []
        latest_model = models[0] if models else None
        total_models = len(models)

        result = self._last_result
        return {
            'status': result.status.value if result else None,
            'epochs': result.epochs if result else None,
            'last_error': result.final_cost if result else None,
            'learning_time': result.elapsed.total_seconds() if result else None,
            'latest_model': latest_model.name if latest_model else None,
            'total_models': total_models
        }

    def _train_and_save(self, network: Perceptron, training_config: TrainingConfiguration,
                        training_set: Sequence[TrainingExample]) -> TrainingResult:
        result = network.train_back_prop(
            training_set,
            threshold=training_config.threshold,
            max_epochs=training_config.max_epochs,
            epoch_callback=self._create_progress_callback(training_config)
        )

        self.model_dir.mkdir(parents=True, exist_ok=True)
        result.model_file = network.save_model(self.model_dir)

        self.network = network
        self._last_result = result
        return result

    def _create_progress_callback(self, config: TrainingConfiguration):
        """Create an epoch callback reporting every ``log_every`` epochs."""
        if config.log_every <= 0:
            return None

        def report(epoch: int, cost: float) -> None:
            if epoch % config.log_every == 0:
                logger.info(f"epoch {epoch}: cost {cost:.6f}")

        return report
