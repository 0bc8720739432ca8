"""Command parsing and execution for reading_list."""

from .commands import CommandResult
from .executor import execute_command
from .history import CommandHistory
from .logic import Logic

__all__ = [
    "CommandHistory",
    "CommandResult",
    "Logic",
    "execute_command",
]
