"""File system model repository storing snapshots as JSON documents."""
import json
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from pydantic import ValidationError

from perceptron.domain.entities.model_snapshot import ModelSnapshot
from perceptron.domain.exceptions import ModelFormatError
from perceptron.domain.repositories.model_repository import ModelInfo, ModelRepository
from perceptron.infrastructure.repositories.model_schema import ModelSchema

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = '%Y%m%d_%H%M%S_%f'
FILENAME_PATTERN = re.compile(r"^model(\d{8}_\d{6}_\d{6})\.json$")


class JsonModelRepository(ModelRepository):
    """JSON file implementation of the model repository.

    Each save creates ``model<timestamp>.json`` in the target directory.
    Text is written and read with the standard ``json`` module, whose float
    formatting round-trips every double exactly; the document structure is
    validated by the pydantic schema.
    """

    def __init__(self, indent: int = 2):
        """Initialize the repository.

        Args:
            indent: JSON indentation of written files
        """
        self.indent = indent

    def save(self, snapshot: ModelSnapshot, directory: Union[str, Path]) -> str:
        """Encode the snapshot into a new timestamped file."""
        document = ModelSchema.from_snapshot(snapshot).model_dump(by_alias=True)
        filename = f"model{datetime.now().strftime(TIMESTAMP_FORMAT)}.json"
        path = Path(directory) / filename
        with open(path, 'x', encoding='utf-8') as f:
            json.dump(document, f, indent=self.indent)
        logger.info(f"Saved model with {len(snapshot.parameters)} layers to {path}")
        return filename

    def load(self, path: Union[str, Path]) -> ModelSnapshot:
        """Read a model file and decode it against the schema."""
        try:
            with open(path, 'r', encoding='utf-8') as f:
                text = f.read()
        except UnicodeDecodeError as e:
            raise ModelFormatError(f"Model file is not valid UTF-8 text: {e}") from e
        return self.decode(text)

    def decode(self, text: str) -> ModelSnapshot:
        """Strictly decode a JSON document into a snapshot.

        Raises:
            ModelFormatError: If the text is not JSON or does not match the schema
        """
        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise ModelFormatError(f"Model file is not valid JSON: {e}") from e
        if not isinstance(document, dict):
            raise ModelFormatError("Model file must contain a JSON object")
        try:
            return ModelSchema.model_validate(document).to_snapshot()
        except ValidationError as e:
            raise ModelFormatError(f"Model file does not match the expected schema: {e}") from e

    def list_models(self, directory: Union[str, Path]) -> List[ModelInfo]:
        """List model files sorted by creation time (newest first)."""
        models = [self.parse_model_metadata(path) for path in Path(directory).glob('model*.json')
                  if self.model_exists(path)]
        models.sort(key=lambda m: (m.created or datetime.min, m.mtime), reverse=True)
        return models

    def find_latest_model(self, directory: Union[str, Path]) -> Optional[ModelInfo]:
        """Find the most recently created model file."""
        models = self.list_models(directory)
        return models[0] if models else None

    def parse_model_metadata(self, path: Path) -> ModelInfo:
        """Parse the creation timestamp from a ``model<timestamp>.json`` name."""
        created = None
        match = FILENAME_PATTERN.match(path.name)
        if match:
            created = datetime.strptime(match.group(1), TIMESTAMP_FORMAT)
        return ModelInfo(path, created)

    def model_exists(self, path: Union[str, Path]) -> bool:
        """Check if a model file exists at path."""
        path = Path(path)
        return path.exists() and path.is_file()
