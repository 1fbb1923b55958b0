"""Perceptron - ordered chain of layers trained by online backpropagation.

This module contains the inference and training engine: the forward pass
through the layer chain, the reverse-ordered backward pass and the epoch
loop that runs until the mean squared error drops to a threshold.
"""
import logging
import time
from datetime import timedelta
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

import torch

from perceptron.domain.entities.layer_config import LayerConfig
from perceptron.domain.entities.model_snapshot import LayerParameters, ModelSnapshot
from perceptron.domain.exceptions import PerceptronError, ShapeMismatchError
from perceptron.domain.models.layer import DTYPE, Layer, VectorLike, as_vector
from perceptron.domain.repositories.model_repository import ModelRepository
from perceptron.domain.services.training_service import (
    TrainingExample,
    TrainingResult,
    TrainingStatus
)

logger = logging.getLogger(__name__)

EpochCallback = Callable[[int, float], None]


def validate_layer_chain(configs: Sequence[LayerConfig]) -> None:
    """Check that every layer accepts exactly what the previous one emits.

    Raises:
        ValueError: If there are no layers
        ShapeMismatchError: If two adjacent layers disagree
    """
    if not configs:
        raise ValueError("A network needs at least one layer")
    for index in range(1, len(configs)):
        previous, current = configs[index - 1], configs[index]
        if current.inputs != previous.outputs:
            raise ShapeMismatchError(
                f"Layer {index} expects {current.inputs} inputs but layer "
                f"{index - 1} produces {previous.outputs} outputs"
            )


class Perceptron:
    """Multi-layer perceptron.

    Only computational layers are configured; the raw input is not a layer.
    The last layer is the output layer. ``last_error`` and
    ``last_learning_time`` describe the most recent training run (or the
    loaded model).
    """

    def __init__(self, *configs: LayerConfig, repository: Optional[ModelRepository] = None):
        """Build a network with randomly initialized layers.

        Args:
            *configs: One config per computational layer, input side first.
                May be empty when the network is going to be loaded.
            repository: Model persistence backend (JSON files by default)

        Raises:
            ShapeMismatchError: If the layer chain is inconsistent
        """
        self._repository = repository
        self.layers: List[Layer] = []
        self.last_error: float = 0.0
        self.last_learning_time: timedelta = timedelta()
        if configs:
            validate_layer_chain(configs)
            self.layers = [Layer(config) for config in configs]

    @classmethod
    def from_model(cls, path: Union[str, Path],
                   repository: Optional[ModelRepository] = None) -> 'Perceptron':
        """Create a network from a persisted model file."""
        network = cls(repository=repository)
        network.load_model(path)
        return network

    def __repr__(self) -> str:
        sizes = [self.layers[0].config.inputs] if self.layers else []
        sizes += [layer.config.outputs for layer in self.layers]
        return f"Perceptron(sizes={sizes}, last_error={self.last_error})"

    @property
    def output_layer_index(self) -> int:
        return len(self.layers) - 1

    @property
    def input_size(self) -> int:
        self._require_layers()
        return self.layers[0].config.inputs

    @property
    def output_size(self) -> int:
        self._require_layers()
        return self.layers[-1].config.outputs

    @property
    def repository(self) -> ModelRepository:
        """Persistence backend, created on first use."""
        if self._repository is None:
            # Import here to keep the domain free of infrastructure at import time
            from perceptron.infrastructure.repositories.json_model_repository import JsonModelRepository
            self._repository = JsonModelRepository()
        return self._repository

    def predict(self, inputs: VectorLike) -> torch.Tensor:
        """Feed one input vector through every layer.

        Raises:
            ShapeMismatchError: If the input size differs from layer 0's
        """
        self._require_layers()
        output = as_vector(inputs)
        if output.shape[0] != self.input_size:
            raise ShapeMismatchError(
                f"Network expects {self.input_size} inputs, got {output.shape[0]}"
            )
        for layer in self.layers:
            output = layer.compute(output)
        return output

    def train_back_prop(self, training_set: Sequence[TrainingExample],
                        threshold: float = 0.001,
                        max_epochs: Optional[int] = None,
                        epoch_callback: Optional[EpochCallback] = None) -> TrainingResult:
        """Train with per-example backpropagation until the epoch cost is low enough.

        Every epoch visits the examples in order, updating all weights after
        each example. The loop checks the cost only after a full epoch, so at
        least one epoch always runs. Without ``max_epochs`` an unreachable
        threshold keeps the loop running forever.

        Args:
            training_set: Ordered (input, target) pairs
            threshold: Stop once the epoch cost is at or below this value
            max_epochs: Optional bound; reaching it ends the run as EXHAUSTED
            epoch_callback: Called with (epoch, cost) after every epoch

        Returns:
            TrainingResult with the convergence status

        Raises:
            ValueError: If the threshold, bound or training set is invalid
            ShapeMismatchError: If any example has the wrong size; raised
                before any weight is touched
        """
        self._require_layers()
        if threshold <= 0:
            raise ValueError("threshold must be positive")
        if max_epochs is not None and max_epochs <= 0:
            raise ValueError("max_epochs must be positive")
        examples = self._prepare_training_set(training_set)

        started = time.perf_counter()
        mses = torch.zeros(len(examples), dtype=DTYPE)
        epoch = 0
        while True:
            for i, (x, y) in enumerate(examples):
                errors = y - self.predict(x)
                mses[i] = self.get_mse(errors)
                signal = self.layers[self.output_layer_index].compute_output_backward(errors)
                for j in range(self.output_layer_index - 1, -1, -1):
                    signal = self.layers[j].compute_hidden_backward(signal)
            epoch += 1
            epoch_cost = self.get_cost(mses)
            logger.debug("%s - epoch %s", epoch_cost, epoch)
            if epoch_callback is not None:
                epoch_callback(epoch, epoch_cost)
            if epoch_cost <= threshold:
                status = TrainingStatus.CONVERGED
                break
            if max_epochs is not None and epoch >= max_epochs:
                status = TrainingStatus.EXHAUSTED
                break

        self.last_error = epoch_cost
        self.last_learning_time = timedelta(seconds=time.perf_counter() - started)
        seconds = self.last_learning_time.total_seconds()
        if status is TrainingStatus.EXHAUSTED:
            logger.warning(
                f"Training stopped after {epoch} epochs without reaching threshold "
                f"{threshold} (cost {epoch_cost})"
            )
        else:
            logger.info(f"Converged after {epoch} epochs, cost {epoch_cost}, {seconds} seconds")
        return TrainingResult(status, epoch, epoch_cost, self.last_learning_time)

    def snapshot(self) -> ModelSnapshot:
        """Capture configs, weights and run statistics."""
        return ModelSnapshot(
            last_error=self.last_error,
            last_learning_time=self.last_learning_time,
            parameters=[LayerParameters(layer.config, layer.get_weights()) for layer in self.layers]
        )

    def restore(self, snapshot: ModelSnapshot) -> None:
        """Replace all layers and statistics with the snapshot's.

        The new layer chain is fully built before anything is replaced.
        """
        configs = snapshot.layer_configs
        validate_layer_chain(configs)
        layers = []
        for parameters in snapshot.parameters:
            layer = Layer(parameters.config)
            layer.set_weights(parameters.weights)
            layers.append(layer)
        self.layers = layers
        self.last_error = snapshot.last_error
        self.last_learning_time = snapshot.last_learning_time

    def load_model(self, path: Union[str, Path]) -> None:
        """Replace the whole network with a persisted model.

        Raises:
            OSError: If the file cannot be read
            ModelFormatError: If the content does not decode
        """
        self.restore(self.repository.load(path))
        logger.info(f"Loaded model with {len(self.layers)} layers from {path}")

    def save_model(self, directory: Union[str, Path]) -> str:
        """Persist the network into a new timestamped file.

        Returns:
            The generated file name, without the directory

        Raises:
            OSError: If the directory is not writable
        """
        self._require_layers()
        return self.repository.save(self.snapshot(), directory)

    @staticmethod
    def get_mse(errors: VectorLike) -> float:
        """Squared error of one example: ``0.5 * (E . E)``."""
        e = as_vector(errors)
        return float((e @ e) * 0.5)

    @staticmethod
    def get_cost(mses: VectorLike) -> float:
        """Epoch cost: the arithmetic mean of the per-example errors."""
        m = as_vector(mses)
        if m.shape[0] == 0:
            raise ValueError("Cannot compute the cost of an empty epoch")
        return float((m @ torch.ones(m.shape[0], dtype=DTYPE)) / m.shape[0])

    def _require_layers(self) -> None:
        if not self.layers:
            raise PerceptronError("Network has no layers; construct it with configs or load a model")

    def _prepare_training_set(self, training_set: Sequence[TrainingExample]) -> List[TrainingExample]:
        if len(training_set) == 0:
            raise ValueError("training set must not be empty")
        examples = []
        for index, (inputs, target) in enumerate(training_set):
            x, y = as_vector(inputs), as_vector(target)
            if x.shape[0] != self.input_size:
                raise ShapeMismatchError(
                    f"Example {index}: expected {self.input_size} inputs, got {x.shape[0]}"
                )
            if y.shape[0] != self.output_size:
                raise ShapeMismatchError(
                    f"Example {index}: expected {self.output_size} targets, got {y.shape[0]}"
                )
            examples.append((x, y))
        return examples
