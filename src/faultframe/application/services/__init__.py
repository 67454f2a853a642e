"""Pipeline services."""

from faultframe.application.services.pipeline import (
    default_config,
    exception_chain,
    extract_stack_from_error,
    get_exception_from_error,
    parse_error,
    parse_message,
    parse_stack,
)

__all__ = [
    "default_config",
    "exception_chain",
    "extract_stack_from_error",
    "get_exception_from_error",
    "parse_error",
    "parse_message",
    "parse_stack",
]
