"""Training orchestration service - Business logic for training operations."""
from abc import ABC, abstractmethod
from datetime import timedelta
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import torch

from perceptron.domain.entities.layer_config import LayerConfig
from perceptron.domain.entities.training_config import TrainingConfiguration

TrainingExample = Tuple[torch.Tensor, torch.Tensor]


class TrainingStatus(Enum):
    """How a training run ended."""
    CONVERGED = 'converged'
    EXHAUSTED = 'exhausted'


class TrainingResult:
    """Result of a training run.

    Encapsulates the outcome of a backpropagation run: whether the cost
    reached the threshold, how many epochs it took and the final cost.
    """

    def __init__(self, status: TrainingStatus, epochs: int, final_cost: float,
                 elapsed: timedelta, model_file: Optional[str] = None):
        """Initialize training result.

        Args:
            status: Whether the threshold was reached or the epoch bound hit
            epochs: Number of completed epochs
            final_cost: Cost of the last epoch
            elapsed: Wall-clock duration of the whole run
            model_file: Name of the saved model file, if the run was persisted
        """
        self.status = status
        self.epochs = epochs
        self.final_cost = final_cost
        self.elapsed = elapsed
        self.model_file = model_file

    @property
    def converged(self) -> bool:
        return self.status is TrainingStatus.CONVERGED

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (f"TrainingResult(status={self.status.value}, epochs={self.epochs}, "
                f"final_cost={self.final_cost:.6f}, elapsed={self.elapsed.total_seconds():.3f}s)")


class TrainingService(ABC):
    """Abstract interface for training orchestration.

    Defines the contract for building, training and persisting networks,
    so that entry points stay independent of storage details.
    """

    @abstractmethod
    def train_model(self, layer_configs: List[LayerConfig],
                    training_config: TrainingConfiguration,
                    training_set: Sequence[TrainingExample]) -> TrainingResult:
        """Build a fresh network and train it.

        Args:
            layer_configs: Computational layer configurations, input side first
            training_config: Convergence policy
            training_set: Ordered (input, target) pairs

        Returns:
            TrainingResult describing the run
        """
        pass

    @abstractmethod
    def resume_training(self, model_path: Path,
                        training_config: TrainingConfiguration,
                        training_set: Sequence[TrainingExample]) -> TrainingResult:
        """Load a persisted network and continue training it."""
        pass

    @abstractmethod
    def validate_configuration(self, layer_configs: List[LayerConfig],
                               training_config: TrainingConfiguration) -> None:
        """Validate the layer chain and training configuration.

        Raises:
            ValueError: If the configuration is invalid or inconsistent
        """
        pass

    @abstractmethod
    def get_training_status(self) -> dict:
        """Get information about the last run and the saved models."""
        pass
