"""Pass-through extractor for error.stack already holding RawStackEntry."""

from __future__ import annotations

from faultframe.domain.exceptions import ConversionError
from faultframe.domain.model.raw_entry import RawStackEntry


class RawEntriesExtractor:
    """Accepts error.stack as list/tuple of RawStackEntry (innermost first).

    Lets embedders that parse their own engine stacks plug into the rest
    of the pipeline.
    """

    async def extract(self, error: object) -> tuple[RawStackEntry, ...]:
        """Return error.stack entries.

        Raises:
            ConversionError: Stack mixes RawStackEntry with other values.
        """
        stack = getattr(error, "stack", None)
        if not isinstance(stack, (list, tuple)) or not stack:
            return ()
        if not isinstance(stack[0], RawStackEntry):
            return ()
        for item in stack:
            if not isinstance(item, RawStackEntry):
                raise ConversionError(expected="RawStackEntry", got=type(item))
        return tuple(stack)
