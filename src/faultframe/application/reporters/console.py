"""Console reporter: EventRecord -> rich formatted string."""

from __future__ import annotations

from dataclasses import dataclass
from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

if TYPE_CHECKING:
    from faultframe.domain.model.frame import NormalizedFrame
    from faultframe.domain.model.records import EventRecord, ExceptionRecord


@dataclass(frozen=True, slots=True)
class ConsoleConfig:
    """Configuration for console reporter.

    Attributes:
        show_context: Render source context lines of in-app frames.
        show_library_frames: Render frames that are not in-app.
        show_extra: Render the extra section.
        width: Console width in characters.
    """

    show_context: bool = True
    show_library_frames: bool = True
    show_extra: bool = True
    width: int = 120

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.width <= 0:
            raise ValueError(f"width must be > 0, got {self.width}")


class ConsoleReporter:
    """Console reporter: traceback-style rendering of an event.

    Frames render outermost first, fault frame last, as stored.
    """

    def __init__(self, config: ConsoleConfig | None = None) -> None:
        """Initialize reporter.

        Args:
            config: Reporter configuration. Uses defaults if None.
        """
        self._config = config or ConsoleConfig()

    def report(self, event: EventRecord) -> str:
        """Format event as rich formatted string."""
        output = StringIO()
        console = Console(
            file=output,
            force_terminal=True,
            width=self._config.width,
            highlight=False,
            emoji=False,
        )

        console.print()
        console.rule(f"[bold]{escape(event.message)}[/bold]")
        console.print()

        if event.frames:
            self._render_frames(console, event.frames)

        for record in event.exceptions:
            self._render_exception(console, record)

        if self._config.show_extra and event.extra:
            self._render_extra(console, event)

        return output.getvalue()

    def _render_exception(self, console: Console, record: ExceptionRecord) -> None:
        """Render one exception: frames, then type and value."""
        self._render_frames(console, record.frames)
        console.print(f"[bold red]{escape(record.type)}[/bold red]: {escape(record.value)}")
        console.print()

    def _render_frames(self, console: Console, frames: tuple[NormalizedFrame, ...]) -> None:
        """Render frames, skipping library frames unless configured."""
        for frame in frames:
            if not frame.in_app and not self._config.show_library_frames:
                continue
            self._render_frame(console, frame)

    def _render_frame(self, console: Console, frame: NormalizedFrame) -> None:
        """Render frame header and optional source context."""
        location = escape(frame.filename or "<unknown>")
        if frame.lineno is not None:
            location = f"{location}:{frame.lineno}"
        style = "bold" if frame.in_app else "dim"
        module = f" [dim]({escape(frame.module)})[/dim]" if frame.module else ""
        console.print(f"  [{style}]{location}[/{style}] in [cyan]{escape(frame.function)}[/cyan]{module}")

        if not self._config.show_context or not frame.has_context:
            return

        for line in frame.pre_context or ():
            console.print(f"      [dim]{escape(line)}[/dim]")
        if frame.context_line is not None:
            console.print(f"    [yellow]>[/yellow] {escape(frame.context_line)}")
        for line in frame.post_context or ():
            console.print(f"      [dim]{escape(line)}[/dim]")

    def _render_extra(self, console: Console, event: EventRecord) -> None:
        """Render extra attributes grouped by type name."""
        console.print("[bold]EXTRA[/bold]")
        for type_name, attributes in event.extra.items():
            console.print(f"  [yellow]{escape(type_name)}[/yellow]")
            for key, value in attributes.items():
                console.print(f"    {escape(key)} = {escape(repr(value))}")
        console.print()
