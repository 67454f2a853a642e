"""Ports: interfaces the infrastructure layer implements."""

from faultframe.domain.ports.source_reader import SourceReader
from faultframe.domain.ports.stack_extractor import StackExtractor

__all__ = ["SourceReader", "StackExtractor"]
