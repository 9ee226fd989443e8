"""Parser for the ``--parameters`` flag value.

The value is a bracketed, comma separated list of keys, e.g.
``[PLAN_DATABASE_USERNAME, SOME_OTHER]``. Anything that does not follow
that shape yields an empty set instead of an error.
"""

from cluster_completion.logger import get_logger

logger = get_logger("parsers")


class ParameterListParser:
    """Parses ``[KEY, KEY, ...]`` into a set of keys."""

    def parse(self, value: str | None) -> frozenset[str]:
        """
        Parse a parameter list.

        Examples:
            '[A, B]' -> {'A', 'B'}
            '[A,B]'  -> {'A', 'B'}
            '[]'     -> set()
            'A, B'   -> set()   (missing brackets)
            '[A, ]'  -> set()   (empty entry)

        Args:
            value: Raw flag value, or None when the flag was not given

        Returns:
            The keys already supplied on the command line
        """
        if not value:
            return frozenset()

        text = value.strip()
        if len(text) < 2 or not (text.startswith("[") and text.endswith("]")):
            logger.debug(f"Ignoring parameter list without brackets: {value!r}")
            return frozenset()

        inner = text[1:-1].strip()
        if not inner:
            return frozenset()

        keys = [part.strip() for part in inner.split(",")]
        if any(not key or "[" in key or "]" in key for key in keys):
            logger.debug(f"Ignoring malformed parameter list: {value!r}")
            return frozenset()

        return frozenset(keys)


def parse_parameter_list(value: str | None) -> frozenset[str]:
    """Module-level shortcut for :meth:`ParameterListParser.parse`."""
    return ParameterListParser().parse(value)
