"""Shell completion engine for cluster-facing developer CLIs."""

__version__ = "0.1.0"
