"""Task domain entity."""

from dataclasses import dataclass, field, replace
from uuid import uuid4


@dataclass(frozen=True)
class Task:
    """Immutable domain entity for a to-do item.

    Completing or activating a task yields a new value with the same id.
    """

    title: str | None = None
    description: str | None = None
    completed: bool = False
    id: str = field(default_factory=lambda: str(uuid4()))

    @property
    def title_for_list(self) -> str | None:
        """Title if present, otherwise the description."""
        return self.title if self.title else self.description

    @property
    def is_active(self) -> bool:
        return not self.completed

    @property
    def is_empty(self) -> bool:
        """True when neither title nor description has content."""
        return not self.title and not self.description

    def complete(self) -> "Task":
        """Return a completed copy of this task."""
        return replace(self, completed=True)

    def activate(self) -> "Task":
        """Return an active copy of this task."""
        return replace(self, completed=False)
