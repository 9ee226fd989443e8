"""Helpers that assemble suggestion lists."""

from collections.abc import Collection, Iterable


def unique(values: Iterable[str]) -> list[str]:
    """Drop duplicates, keeping the first occurrence of each value."""
    return list(dict.fromkeys(values))


def without(values: Iterable[str], excluded: Collection[str]) -> list[str]:
    """Remove every value contained in ``excluded`` (set difference, order kept)."""
    return [value for value in unique(values) if value not in excluded]


def matching_prefix(values: Iterable[str], prefix: str) -> list[str]:
    """Keep values that start with ``prefix``; an empty prefix keeps everything."""
    if not prefix:
        return unique(values)
    return [value for value in unique(values) if value.startswith(prefix)]
