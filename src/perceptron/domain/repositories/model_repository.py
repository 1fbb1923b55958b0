"""Abstract model persistence - Repository pattern for data access."""
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from perceptron.domain.entities.model_snapshot import ModelSnapshot


class ModelInfo:
    """Persisted model metadata container.

    Encapsulates information about a saved model file, including its path
    and the creation time encoded in its file name.
    """

    def __init__(self, path: Path, created: Optional[datetime]):
        """Initialize model information.

        Args:
            path: Path to the model file
            created: Creation time parsed from the file name (if available)
        """
        self.path = path
        self.created = created
        # Missing files sort last
        try:
            self.mtime = path.stat().st_mtime
        except FileNotFoundError:
            self.mtime = 0.0

    @property
    def name(self) -> str:
        """Get the model filename."""
        return self.path.name

    def __repr__(self) -> str:
        """String representation for debugging."""
        created_str = self.created.isoformat() if self.created is not None else "None"
        return f"ModelInfo(path={self.path.name}, created={created_str})"


class ModelRepository(ABC):
    """Abstract interface for model persistence operations.

    This repository defines the contract for storing network snapshots,
    allowing different encodings or storage backends to implement the
    same interface.
    """

    @abstractmethod
    def save(self, snapshot: ModelSnapshot, directory: Union[str, Path]) -> str:
        """Write a snapshot to a new file in ``directory``.

        Returns:
            The generated file name (not the full path)

        Raises:
            OSError: If the directory is missing or not writable
        """
        pass

    @abstractmethod
    def load(self, path: Union[str, Path]) -> ModelSnapshot:
        """Read and strictly decode a snapshot.

        Raises:
            OSError: If the path is unreadable
            ModelFormatError: If the content does not match the schema
        """
        pass

    @abstractmethod
    def list_models(self, directory: Union[str, Path]) -> List[ModelInfo]:
        """List saved models, newest first."""
        pass

    @abstractmethod
    def find_latest_model(self, directory: Union[str, Path]) -> Optional[ModelInfo]:
        """Find the most recently created model, or None if there is none."""
        pass

    @abstractmethod
    def model_exists(self, path: Union[str, Path]) -> bool:
        """Check if a model file exists at the given path."""
        pass
