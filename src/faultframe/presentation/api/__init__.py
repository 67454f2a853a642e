"""Public capture API."""

from faultframe.presentation.api.capture import capture_exception, capture_message

__all__ = ["capture_exception", "capture_message"]
