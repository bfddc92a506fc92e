"""JSON file ConfigStore — reads raw engine configuration from disk."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from assignment_engine.application.ports.config_store import ConfigStore
from assignment_engine.domain.exceptions import ConfigInvalidError

logger = logging.getLogger(__name__)


class JsonFileConfigStore(ConfigStore):
    """A missing file means "all defaults"; unreadable JSON is a config error."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    async def load(self) -> dict[str, Any]:
        if not self._path.exists():
            logger.info("Config file %s not found, using defaults", self._path)
            return {}

        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            logger.error("Config file %s is not valid JSON: %s", self._path, e)
            raise ConfigInvalidError(
                f"Config file {self._path} is not valid JSON",
                [f"line {e.lineno} column {e.colno}: {e.msg}"],
            ) from e

        if not isinstance(raw, dict):
            raise ConfigInvalidError(
                f"Config file {self._path} must contain a JSON object",
                [f"<root>: expected object, got {type(raw).__name__}"],
            )
        return raw
