"""Reporters: EventRecord -> str."""

from faultframe.application.reporters.console import ConsoleConfig, ConsoleReporter
from faultframe.application.reporters.json import JsonReporter
from faultframe.application.reporters.protocol import ReporterProtocol

__all__ = [
    "ConsoleConfig",
    "ConsoleReporter",
    "JsonReporter",
    "ReporterProtocol",
]
