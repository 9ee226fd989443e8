"""Session scope for resource listings."""

from dataclasses import dataclass

__all__ = ["SessionScope"]


@dataclass(frozen=True, slots=True)
class SessionScope:
    """Namespace, application and current component of a completion call.

    All listings are scoped to ``namespace``/``application``; ``component``
    is the source of link and unlink operations.
    """

    namespace: str
    application: str
    component: str = ""
