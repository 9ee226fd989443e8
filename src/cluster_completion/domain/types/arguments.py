"""Parsed state of the command line being completed."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

__all__ = [
    "ArgumentState",
    "ArgumentStateBuilder",
    "DEFAULT_VALUE_FLAGS",
    "PLAN_FLAG",
    "PARAMETERS_FLAG",
]

PLAN_FLAG = "plan"
PARAMETERS_FLAG = "parameters"

# Flags that consume the following word when written as ``--flag value``
DEFAULT_VALUE_FLAGS = frozenset(
    {PLAN_FLAG, PARAMETERS_FLAG, "app", "project", "component", "namespace", "context", "kubeconfig"}
)


@dataclass(frozen=True, slots=True)
class ArgumentState:
    """Snapshot of the in-progress command line.

    ``completed_tokens`` holds the positional words already accepted, the
    subcommand first. ``last`` is the word under the cursor and may be empty.
    """

    completed_tokens: tuple[str, ...]
    flag_values: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    typed_names: frozenset[str] = frozenset()
    last: str = ""

    def current_token(self) -> str:
        return self.last

    def token_at(self, index: int) -> str | None:
        """Return the completed token at ``index`` or ``None`` if not supplied yet."""
        if index < 0 or index >= len(self.completed_tokens):
            return None
        return self.completed_tokens[index]

    def flag(self, name: str) -> str | None:
        return self.flag_values.get(name)

    def is_typed(self, name: str) -> bool:
        return name in self.typed_names

    @property
    def subcommand(self) -> str | None:
        return self.token_at(0)

    @property
    def plan(self) -> str | None:
        return self.flag(PLAN_FLAG)

    @property
    def parameters(self) -> str | None:
        return self.flag(PARAMETERS_FLAG)


class ArgumentStateBuilder:
    """Assembles an :class:`ArgumentState` once per completion call.

    Example:
        >>> state = (
        ...     ArgumentStateBuilder("create")
        ...     .token("mysql-persistent")
        ...     .flag("plan", "default")
        ...     .build()
        ... )
        >>> state.plan
        'default'
    """

    def __init__(self, subcommand: str) -> None:
        self._tokens: list[str] = [subcommand]
        self._flags: dict[str, str] = {}
        self._typed: set[str] = set()
        self._last = ""

    def token(self, value: str) -> "ArgumentStateBuilder":
        self._tokens.append(value)
        return self

    def tokens(self, values: Iterable[str]) -> "ArgumentStateBuilder":
        self._tokens.extend(values)
        return self

    def flag(self, name: str, value: str) -> "ArgumentStateBuilder":
        self._flags[name.lstrip("-")] = value
        return self

    def typed(self, *names: str) -> "ArgumentStateBuilder":
        self._typed.update(names)
        return self

    def last(self, value: str) -> "ArgumentStateBuilder":
        self._last = value
        return self

    def build(self) -> ArgumentState:
        return ArgumentState(
            completed_tokens=tuple(self._tokens),
            flag_values=MappingProxyType(dict(self._flags)),
            typed_names=frozenset(self._typed),
            last=self._last,
        )

    @classmethod
    def from_words(
        cls,
        words: Sequence[str],
        last: str = "",
        value_flags: Iterable[str] = DEFAULT_VALUE_FLAGS,
    ) -> ArgumentState:
        """Build the state from the completed words of the leaf command.

        ``words[0]`` is the subcommand. ``--name=value`` always records a flag
        value; ``--name value`` does so only for flags in ``value_flags``.
        Every positional word after the subcommand counts as a typed name.

        Args:
            words: Completed words, subcommand first
            last: The (possibly partial) word under the cursor
            value_flags: Flag names that take a separate value word

        Returns:
            ArgumentState for the words

        Raises:
            ValueError: If ``words`` is empty
        """
        if not words:
            raise ValueError("at least the subcommand is required")

        value_flags = frozenset(value_flags)
        builder = cls(words[0]).last(last)
        pending_flag: str | None = None

        for word in words[1:]:
            if pending_flag is not None:
                builder.flag(pending_flag, word)
                pending_flag = None
                continue

            if word.startswith("-") and word != "-":
                name, sep, value = word.lstrip("-").partition("=")
                if sep:
                    builder.flag(name, value)
                elif name in value_flags:
                    pending_flag = name
                continue

            builder.token(word).typed(word)

        return builder.build()
