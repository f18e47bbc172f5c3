"""JSON content loader: reads external conditions from a content directory.

Each ``*.json`` file holds the conditions of one entity:

    {
      "entity": "Account",
      "conditions": [
        {"field": "age", "constraint": "range_from_to", "range_from": 0, "range_to": 150,
         "severity": "recoverable", "message": "age must be between {range_from} and {range_to}"}
      ]
    }

``entity`` defaults to the file stem. The directory is read once, on first
lookup, and the table is published only after every file has been parsed.
"""

import json
import threading
from pathlib import Path
from typing import Optional, Union

import structlog
from pydantic import ValidationError

from envali.exceptions import ContentFormatError
from envali.validators.content.conditions import ExternalCondition
from envali.validators.content.sources import index_conditions
from envali.validators.models import ConstraintTag

logger = structlog.get_logger()


def parse_content(data: object, default_entity: str) -> list[ExternalCondition]:
    """Parse one decoded content document into conditions."""
    if not isinstance(data, dict) or not isinstance(data.get("conditions", []), list):
        raise ContentFormatError(
            f"Content for '{default_entity}' must be an object with a 'conditions' list"
        )

    entity = data.get("entity", default_entity)
    conditions = []
    for i, row in enumerate(data.get("conditions", [])):
        if not isinstance(row, dict):
            raise ContentFormatError(f"Condition #{i+1} of '{entity}' must be an object")
        try:
            conditions.append(ExternalCondition.model_validate({"entity": entity, **row}))
        except ValidationError as e:
            raise ContentFormatError(f"Condition #{i+1} of '{entity}' is invalid: {e}") from e
    return conditions


def load_content_file(path: Union[str, Path]) -> list[ExternalCondition]:
    """Read and parse a single content file."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ContentFormatError(f"Cannot parse content file {path}: {e}") from e
    return parse_content(data, path.stem)


class JsonContentSource:
    """Content source backed by a directory of JSON files."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)
        self._conditions: Optional[dict[tuple[str, str, ConstraintTag], ExternalCondition]] = None
        self._lock = threading.Lock()

    def load(self) -> dict[tuple[str, str, ConstraintTag], ExternalCondition]:
        """Load and cache every content file in the directory."""
        if self._conditions is not None:
            return self._conditions

        with self._lock:
            if self._conditions is None:
                self._conditions = self._read_all()
        return self._conditions

    def _read_all(self) -> dict[tuple[str, str, ConstraintTag], ExternalCondition]:
        if not self.directory.is_dir():
            logger.debug("content_dir_missing", directory=str(self.directory))
            return {}

        files = sorted(self.directory.glob("*.json"))
        conditions = []
        for json_file in files:
            conditions.extend(load_content_file(json_file))

        indexed = index_conditions(conditions)
        logger.info(
            "content_loaded",
            directory=str(self.directory),
            files=len(files),
            conditions=len(indexed),
        )
        return indexed

    def lookup(
        self, entity_name: str, field_name: str, tag: Union[ConstraintTag, str]
    ) -> Optional[ExternalCondition]:
        return self.load().get((entity_name, field_name, ConstraintTag(tag)))

    def entities(self) -> list[str]:
        """All entity names with at least one condition."""
        return sorted({entity for entity, _, _ in self.load()})

    def __len__(self) -> int:
        return len(self.load())
