"""Executable Textual app demonstrating debounced undo/redo on a TextArea."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.widgets import Footer, Header, Static, TextArea
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use rundo_engine.adapters.textual.app"
    ) from exc

from rundo_engine.runtime import telemetry
from rundo_engine.tracker import TrackerConfig

from .controller import TextualHistoryAdapter, TextualScheduler, TextualUIHooks


class RundoDemoApp(App[None]):
    """TextArea whose undo/redo history is kept by ``EditTracker``."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor {
		height: 1fr;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    # priority so TextArea's own undo bindings never see these keys
    BINDINGS = [
        Binding("ctrl+z", "undo", "Undo", priority=True),
        Binding("ctrl+y", "redo", "Redo", priority=True),
        Binding("ctrl+l", "clear_history", "Clear history", priority=True),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, config: Optional[TrackerConfig] = None, text: str = "") -> None:
        super().__init__()
        self._config = config or TrackerConfig.from_env()
        self._initial_text = text
        self.adapter: TextualHistoryAdapter | None = None
        self._status_widget: Static | None = None
        self.logger = telemetry.get_logger("rundo_engine.adapters.textual.app")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield TextArea(self._initial_text, id="editor")
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        area = self.query_one("#editor", TextArea)
        self.adapter = TextualHistoryAdapter(
            area,
            TextualScheduler(self),
            config=self._config,
            hooks=TextualUIHooks(update_status=self._update_status, log=self._log_line),
        )
        self._update_status(
            f"debounce {self._config.debounce_ms}ms, "
            f"capacity {self._config.history_capacity}"
        )
        area.focus()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        del event
        if self.adapter:
            self.adapter.handle_text_changed()

    def action_undo(self) -> None:
        if self.adapter:
            self.adapter.undo()

    def action_redo(self) -> None:
        if self.adapter:
            self.adapter.redo()

    def action_clear_history(self) -> None:
        if self.adapter:
            self.adapter.clear_history()

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _log_line(self, line: str) -> None:
        self.logger.debug(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    defaults = TrackerConfig.from_env()
    parser = argparse.ArgumentParser(description="Run the debounced undo/redo demo.")
    parser.add_argument(
        "--debounce-ms",
        type=int,
        default=defaults.debounce_ms,
        help=f"Pause that closes an edit, in milliseconds (default: {defaults.debounce_ms})",
    )
    parser.add_argument(
        "--capacity",
        type=int,
        default=defaults.history_capacity,
        help=f"Entries kept per history queue (default: {defaults.history_capacity})",
    )
    parser.add_argument(
        "--clear-redo-on-edit",
        action="store_true",
        default=defaults.clear_redo_on_edit,
        help="Drop redo history whenever a new edit is committed",
    )
    parser.add_argument("--file", help="Load initial text from this file")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    config = TrackerConfig(
        debounce_ms=args.debounce_ms,
        history_capacity=args.capacity,
        clear_redo_on_edit=args.clear_redo_on_edit,
    )
    text = ""
    if args.file:
        with open(args.file, encoding="utf-8") as handle:
            text = handle.read()
    RundoDemoApp(config=config, text=text).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
