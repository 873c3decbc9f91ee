"""Custom exceptions for the dispatch context."""

from pathlib import Path
from typing import Optional


class TeamSnapshotError(ValueError):
    """
    Exception raised when a team snapshot file is malformed.

    Attributes:
        message: Error description
        snapshot_path: Path to the snapshot YAML
        entry: Offending member or skill, if any
    """

    def __init__(
        self,
        message: str,
        snapshot_path: Optional[Path] = None,
        entry: Optional[str] = None,
    ):
        self.message = message
        self.snapshot_path = snapshot_path
        self.entry = entry

        parts = [message]
        if snapshot_path:
            parts.append(f"Snapshot file: {snapshot_path}")
        if entry:
            parts.append(f"Entry: {entry}")

        super().__init__("\n".join(parts))
