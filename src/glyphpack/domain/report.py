"""Outcome of a best-effort deletion sweep."""

from dataclasses import dataclass, field


@dataclass
class CleanupReport:
    """Aggregate result of deleting many files.

    Attributes:
        removed: Number of entries deleted
        failed: ``(name, reason)`` for every entry that could not be deleted
    """

    removed: int = 0
    failed: list[tuple[str, str]] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True when every entry was deleted."""
        return not self.failed

    def record_removed(self) -> None:
        self.removed += 1

    def record_failure(self, name: str, reason: str) -> None:
        self.failed.append((name, reason))
