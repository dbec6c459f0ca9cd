"""
AudioQueue Handlers - User input handling.
"""
from .form import EntryForm
from .commands import Command, CommandError, parse_command

__all__ = ['EntryForm', 'Command', 'CommandError', 'parse_command']
