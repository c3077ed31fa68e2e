"""Notification sinks for simulation outcomes."""

from __future__ import annotations

from prompt_toolkit import print_formatted_text
from prompt_toolkit.formatted_text import FormattedText

ERROR_STYLE = "bold ansired"
SUCCESS_STYLE = "bold ansigreen"


class NullNotifier:
    def notify_error(self, message: str) -> None:
        pass

    def notify_success(self, message: str) -> None:
        pass


class ConsoleNotifier:
    """Print outcomes to the terminal, errors in red and successes in green."""

    def __init__(self, file=None):
        self.file = file

    def _emit(self, style: str, label: str, message: str) -> None:
        print_formatted_text(
            FormattedText([(style, label), ("", f" {message}")]),
            file=self.file,
        )

    def notify_error(self, message: str) -> None:
        self._emit(ERROR_STYLE, "Error:", message)

    def notify_success(self, message: str) -> None:
        self._emit(SUCCESS_STYLE, "OK:", message)
