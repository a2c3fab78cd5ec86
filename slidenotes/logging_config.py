"""
Logging setup for slide conversion.

Every record emitted while a deck is being converted is prefixed with the
deck's file name, held in a context variable so nested modules need no extra
arguments.
"""

import logging
import sys
from contextvars import ContextVar
from typing import Optional


current_deck: ContextVar[str] = ContextVar('current_deck', default='')


def set_current_deck(name: Optional[str]) -> None:
    """Mark subsequent log records as belonging to `name`."""
    current_deck.set(name or '')


def clear_current_deck() -> None:
    current_deck.set('')


class DeckFormatter(logging.Formatter):
    """Formatter that prefixes messages with the deck being converted."""

    def format(self, record: logging.LogRecord) -> str:
        deck = current_deck.get()
        if deck:
            # Copy so other handlers still see the original message
            record = logging.makeLogRecord(record.__dict__)
            if record.args:
                deck = deck.replace('%', '%%')
            record.msg = f"[{deck}] {record.msg}"
        return super().format(record)


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger with a single stdout handler."""
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(DeckFormatter(
        fmt='%(asctime)s | %(name)s | %(levelname)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    root_logger.addHandler(handler)
