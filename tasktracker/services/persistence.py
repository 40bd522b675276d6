"""JSON file persistence for the task collection."""

import json
import logging
from pathlib import Path
from typing import List

from pydantic import ValidationError as PydanticValidationError

from ..errors import PersistenceError
from ..models.task import Task

logger = logging.getLogger(__name__)


class TaskFileStorage:
    """Reads and writes the full task snapshot as a JSON array."""

    def __init__(self, path: Path):
        """Initialize the storage.

        Args:
            path: Location of the snapshot file
        """
        self.path = Path(path)

    def _ensure_directory(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PersistenceError(f"Cannot create data directory {self.path.parent}: {e}") from e

    def load(self) -> List[Task]:
        """Load the task snapshot from disk.

        A missing or empty file is a valid empty store.

        Returns:
            Tasks in stored order

        Raises:
            PersistenceError: If the file cannot be read or is malformed
        """
        self._ensure_directory()

        if not self.path.exists():
            logger.debug(f"No snapshot at {self.path}, starting empty")
            return []

        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"Cannot read {self.path}: {e}") from e

        if not raw.strip():
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise PersistenceError(f"Malformed task file {self.path}: {e}") from e

        if data is None:
            return []
        if not isinstance(data, list):
            raise PersistenceError(f"Malformed task file {self.path}: expected a JSON array")

        try:
            tasks = [Task.model_validate(item) for item in data]
        except PydanticValidationError as e:
            raise PersistenceError(f"Invalid task record in {self.path}: {e}") from e

        logger.debug(f"Loaded {len(tasks)} tasks from {self.path}")
        return tasks

    def save(self, tasks: List[Task]) -> None:
        """Overwrite the snapshot with the full task collection.

        Args:
            tasks: Every task in the store, in order

        Raises:
            PersistenceError: If serialization or the write fails
        """
        self._ensure_directory()

        try:
            payload = json.dumps(
                [task.model_dump(mode="json") for task in tasks],
                indent=2,
                ensure_ascii=False,
            )
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"Cannot serialize tasks: {e}") from e

        try:
            self.path.write_text(payload, encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"Failed to save tasks to {self.path}: {e}") from e

        logger.debug(f"Saved {len(tasks)} tasks to {self.path}")
