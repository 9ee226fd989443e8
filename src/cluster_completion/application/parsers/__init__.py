"""Parsers for flag value micro-formats."""

from cluster_completion.application.parsers.parameter_list import (
    ParameterListParser,
    parse_parameter_list,
)

__all__ = [
    "ParameterListParser",
    "parse_parameter_list",
]
