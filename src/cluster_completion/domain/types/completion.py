"""Tagged completion result."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

__all__ = ["Completion"]


@dataclass(frozen=True, slots=True)
class Completion:
    """Outcome of a resolver.

    *Absent* means the context warrants no further completion (for example
    a full name has already been typed). An empty sequence means the
    context is valid but nothing matched. Callers must not conflate the two.
    """

    _values: tuple[str, ...] | None

    @classmethod
    def absent(cls) -> "Completion":
        return cls(None)

    @classmethod
    def empty(cls) -> "Completion":
        return cls(())

    @classmethod
    def of(cls, values: Iterable[str]) -> "Completion":
        """Wrap ``values``, dropping duplicates and keeping first-seen order."""
        return cls(tuple(dict.fromkeys(values)))

    @property
    def is_absent(self) -> bool:
        return self._values is None

    @property
    def values(self) -> tuple[str, ...]:
        """Suggestions; empty for an absent result."""
        return self._values or ()

    def as_set(self) -> frozenset[str]:
        return frozenset(self.values)

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __bool__(self) -> bool:
        return bool(self._values)
