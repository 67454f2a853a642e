"""Adapters for the domain ports."""

from faultframe.infrastructure.adapters.file_reader import AsyncFileReader

__all__ = ["AsyncFileReader"]
