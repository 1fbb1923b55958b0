"""Training configuration entity - encapsulates the convergence policy."""
from dataclasses import dataclass
from typing import Optional


@dataclass
class TrainingConfiguration:
    """Stopping policy of a backpropagation run.

    Attributes:
        threshold: Epoch cost at or below which training stops
        max_epochs: Optional epoch bound; None trains until convergence
        log_every: Report progress every N epochs (0 to disable)
    """
    threshold: float = 0.001
    max_epochs: Optional[int] = None
    log_every: int = 0

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.threshold <= 0:
            raise ValueError("threshold must be positive")
        if self.max_epochs is not None and self.max_epochs <= 0:
            raise ValueError("max_epochs must be positive")
        if self.log_every < 0:
            raise ValueError("log_every must be non-negative")

    @property
    def is_bounded(self) -> bool:
        """Check if training stops after a fixed number of epochs."""
        return self.max_epochs is not None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'threshold': self.threshold,
            'max_epochs': self.max_epochs,
            'log_every': self.log_every
        }
