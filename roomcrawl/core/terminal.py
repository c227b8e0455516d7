from __future__ import annotations

from typing import Any, Callable

from rich.console import Console


class Terminal:
    """Console output plus a blocking line reader."""

    def __init__(self, console: Console | None = None, input_func: Callable[[str], str] | None = None):
        self.console = console or Console()
        self._input = input_func or self.console.input

    def print(self, *objects: Any, **kwargs: Any) -> None:
        self.console.print(*objects, **kwargs)

    def clear(self) -> None:
        if self.console.is_terminal:
            self.console.clear()

    def ask(self, prompt: str) -> str | None:
        try:
            return self._input(prompt)
        except EOFError:
            return None
