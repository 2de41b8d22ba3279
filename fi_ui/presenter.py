from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

PRESENTER_TEMPLATES: dict[str, str] = {
    "info": "[blue]ℹ[/blue] {message}",
    "warning": "[yellow]⚠ {message}[/yellow]",
    "error": "[red]✖ {message}[/red]",
    "success": "[green]✔ {message}[/green]",
}


class PresenterSink(Protocol):
    def emit(self, level: str, message: str) -> None: ...

    def emit_panel(self, message: str, title: str | None) -> None: ...


class Presenter:
    def __init__(self, sink: PresenterSink) -> None:
        self._sink = sink

    def info(self, message: str) -> None:
        self._sink.emit("info", message)

    def warning(self, message: str) -> None:
        self._sink.emit("warning", message)

    def error(self, message: str) -> None:
        self._sink.emit("error", message)

    def success(self, message: str) -> None:
        self._sink.emit("success", message)

    def panel(self, message: str, title: str | None = None) -> None:
        self._sink.emit_panel(message, title)


class _RichPresenterSink:
    def __init__(self, console: Console) -> None:
        self._console = console

    def emit(self, level: str, message: str) -> None:
        template = PRESENTER_TEMPLATES.get(level, "{message}")
        self._console.print(template.format(message=escape(message)))

    def emit_panel(self, message: str, title: str | None) -> None:
        self._console.print(Panel(Text(message), title=Text(title) if title else None, border_style="blue"))


class RichPresenter(Presenter):
    def __init__(self, console: Console) -> None:
        super().__init__(_RichPresenterSink(console))


@dataclass
class _RecordingSink:
    messages: list[tuple[str, str]] = field(default_factory=list)

    def emit(self, level: str, message: str) -> None:
        self.messages.append((level, message))

    def emit_panel(self, message: str, title: str | None) -> None:
        self.messages.append(("panel", message))


class HeadlessPresenter(Presenter):
    """Presenter that records messages instead of printing them."""

    def __init__(self) -> None:
        self._recording = _RecordingSink()
        super().__init__(self._recording)

    @property
    def messages(self) -> list[tuple[str, str]]:
        return self._recording.messages
