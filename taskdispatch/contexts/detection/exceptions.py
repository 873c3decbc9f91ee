"""Custom exceptions for the detection context."""

from pathlib import Path
from typing import Optional


class VocabularyConfigError(ValueError):
    """
    Exception raised when a detection vocabulary override cannot be applied.

    Attributes:
        message: Error description
        config_path: Path to the offending YAML file
        key: Vocabulary key that failed validation, if any
    """

    def __init__(
        self,
        message: str,
        config_path: Optional[Path] = None,
        key: Optional[str] = None,
    ):
        self.message = message
        self.config_path = config_path
        self.key = key

        parts = [message]
        if config_path:
            parts.append(f"Vocabulary file: {config_path}")
        if key:
            parts.append(f"Key: {key}")

        super().__init__("\n".join(parts))
