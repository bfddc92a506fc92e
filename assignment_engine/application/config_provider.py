"""EngineConfigProvider — hot-reloadable engine configuration."""

from __future__ import annotations

import logging

from assignment_engine.application.config_schema import parse_engine_config
from assignment_engine.application.ports.config_store import ConfigStore
from assignment_engine.domain.exceptions import ConfigInvalidError
from assignment_engine.domain.value_objects.engine_config import EngineConfig

logger = logging.getLogger(__name__)


class EngineConfigProvider:
    """Holds the last valid EngineConfig.

    ``current()`` hands out the live instance; callers read it once per pass.
    A failed reload leaves the live config untouched.
    """

    def __init__(self, store: ConfigStore, initial: EngineConfig | None = None):
        self._store = store
        self._current = initial or EngineConfig()
        self._loaded = initial is not None

    @property
    def loaded(self) -> bool:
        return self._loaded

    def current(self) -> EngineConfig:
        return self._current

    async def reload(self) -> EngineConfig:
        """Load, validate and swap in new configuration.

        Raises:
            ConfigInvalidError: if the stored configuration is invalid. The
                previously valid configuration stays live.
        """
        raw = await self._store.load()
        try:
            config = parse_engine_config(raw)
        except ConfigInvalidError as e:
            logger.error(
                "Rejected engine configuration (%d problems), keeping last valid: %s",
                len(e.errors), "; ".join(e.errors),
            )
            raise

        self._current = config
        self._loaded = True
        logger.info(
            "Engine configuration loaded: thresholds auto=%.2f suggest=%.2f, freshness=%ds",
            config.thresholds.auto_assign, config.thresholds.suggest,
            config.freshness_window_seconds,
        )
        return config
