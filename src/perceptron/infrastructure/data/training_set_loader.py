"""Training set loading from YAML or JSON files."""
from pathlib import Path
from typing import List, Union

import torch
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from perceptron.domain.models.layer import DTYPE
from perceptron.domain.services.training_service import TrainingExample


class TrainingExampleModel(BaseModel):
    """One labeled pair as it appears in a data file."""
    model_config = ConfigDict(extra='forbid')

    input: List[float] = Field(min_length=1)
    target: List[float] = Field(min_length=1)


def load_training_set(path: Union[str, Path]) -> List[TrainingExample]:
    """Load ``[{input: [...], target: [...]}, ...]`` into tensor pairs.

    JSON files are read through the YAML parser, which accepts them as well.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a non-empty list of valid examples
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid training data file {path}: {e}")

    if not isinstance(data, list) or not data:
        raise ValueError(f"Training data file {path} must contain a non-empty list of examples")

    examples = []
    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise ValueError(f"Example {index} in {path} must be a mapping")
        try:
            example = TrainingExampleModel(**entry)
        except ValidationError as e:
            raise ValueError(f"Example {index} in {path} is invalid: {e}") from e
        examples.append((torch.tensor(example.input, dtype=DTYPE),
                         torch.tensor(example.target, dtype=DTYPE)))
    return examples
