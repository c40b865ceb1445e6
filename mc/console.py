"""Console output and logging setup.

Text mode goes through rich consoles; JSON mode writes one JSON object per
line. Errors always go to stderr.
"""
import json
import logging
import sys
from typing import Optional

from pydantic import BaseModel
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from mc.errors import McError
from mc.state import RuntimeMode

LOGGER_NAME = "mc"


class Message(BaseModel):
    """Base for anything a command prints.

    Subclasses override ``text`` for the human form; JSON mode dumps the
    model.
    """

    status: str = "success"

    def text(self) -> str:
        return ""


class McConsole:
    """Mode-aware printer handed to every command."""

    def __init__(self, mode: Optional[RuntimeMode] = None):
        self.mode = mode or RuntimeMode()
        self.out = Console(soft_wrap=True, highlight=False, emoji=False)
        self.err = Console(stderr=True, soft_wrap=True, highlight=False, emoji=False)

    def info(self, text: str, style: Optional[str] = None) -> None:
        """Non-essential output; dropped under --quiet or --json."""
        if self.mode.quiet or self.mode.json:
            return
        self.out.print(escape(text), style=style)

    def line(self, text: str) -> None:
        """Essential plain-text output, printed even under --quiet."""
        self.out.print(escape(text))

    def emit(self, message: Message) -> None:
        if self.mode.json:
            self.out.print(message.model_dump_json(by_alias=True), markup=False)
        else:
            self.out.print(escape(message.text()))

    def error(self, err: McError) -> None:
        if self.mode.json:
            payload = {"status": "error", "error": err.to_dict()}
            self.err.print(json.dumps(payload), markup=False)
        else:
            self.err.print(f"[red]mc: {escape(str(err))}[/red]")

    def raw_write(self, data: bytes) -> None:
        stream = sys.stdout.buffer if hasattr(sys.stdout, "buffer") else None
        if stream is None:
            sys.stdout.write(data.decode("utf-8", errors="replace"))
            return
        stream.write(data)
        stream.flush()


def configure_logging(mode: RuntimeMode) -> logging.Logger:
    """Point the ``mc`` logger at stderr with a level derived from the mode."""
    logger = logging.getLogger(LOGGER_NAME)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
            markup=False,
        )
        logger.addHandler(handler)
    if mode.debug:
        logger.setLevel(logging.DEBUG)
    elif mode.quiet:
        logger.setLevel(logging.ERROR)
    else:
        logger.setLevel(logging.WARNING)
    return logger
