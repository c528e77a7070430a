from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class IndexGeneratorError(Exception):
    """Base exception for errors in the index_generator package."""


@dataclass(frozen=True)
class ConfigFileNotFoundError(IndexGeneratorError):
    """Raised when the configuration file given on the command line does not exist."""

    path: Path
    message: str = "Configuration file is not found."

    def __str__(self) -> str:
        return f"{self.message} ({self.path})"


@dataclass(frozen=True)
class InvalidConfigError(IndexGeneratorError):
    """Raised when a configuration file cannot be parsed into options."""

    path: Path
    reason: str
    message: str = "Configuration file is invalid."

    def __str__(self) -> str:
        return f"{self.message} ({self.path}): {self.reason}"
