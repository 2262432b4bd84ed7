"""Base configuration system for galaxy searches."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..data.records import StarSystem
from ..database.schema import MatchedSystem, SYSTEM_COLUMNS


class BaseConfig(ABC):
    """Base class for all galaxy search configurations."""

    def __init__(self, name: str, description: str):
        """Initialize base configuration.

        Args:
            name: Configuration name
            description: Human-readable description
        """
        self.name = name
        self.description = description

    @abstractmethod
    def filter_system(self, system: StarSystem) -> Optional[MatchedSystem]:
        """Filter a single system based on configuration criteria.

        Args:
            system: Parsed star system

        Returns:
            Matched record if the system qualifies, None otherwise
        """
        pass

    def get_output_columns(self) -> List[str]:
        """Get list of columns written to the systems table."""
        return [name for name, _ in SYSTEM_COLUMNS]

    def get_description(self) -> str:
        """Get configuration description."""
        return self.description
