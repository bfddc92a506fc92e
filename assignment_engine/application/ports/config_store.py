"""Port interface for raw engine configuration."""

from abc import ABC, abstractmethod
from typing import Any


class ConfigStore(ABC):
    @abstractmethod
    async def load(self) -> dict[str, Any]:
        """Return the raw (unvalidated) configuration mapping."""
        ...
