"""Presentation layer: the command line front end."""

from cluster_completion.presentation.cli import cli

__all__ = ["cli"]
