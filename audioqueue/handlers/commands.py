"""
Command Handler - Parses console input into actions.
"""
import shlex
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..utils import parse_time

logger = logging.getLogger(__name__)

# name -> (usage, help)
COMMANDS = {
    'list': ('list', 'Show the library'),
    'search': ('search [text]', 'Filter by title, author or category (empty clears)'),
    'add': ('add', 'Add a book or podcast'),
    'play': ('play N', 'Play/pause item N'),
    'seek': ('seek N TIME', 'Jump item N to TIME (seconds, m:ss or h:mm:ss)'),
    'stats': ('stats', 'Show status counts'),
    'cover': ('cover N PATH', 'Save the cover of item N as a PNG'),
    'help': ('help', 'Show this help'),
    'quit': ('quit', 'Exit'),
}

ALIASES = {
    'ls': 'list',
    '/': 'search',
    'p': 'play',
    'q': 'quit',
    'exit': 'quit',
    '?': 'help',
}


class CommandError(ValueError):
    """Raised when a console line cannot be understood."""


@dataclass
class Command:
    """A parsed console command."""
    name: str
    args: List[str] = field(default_factory=list)
    index: Optional[int] = None     # 0-based item index for play/seek/cover
    time: Optional[float] = None    # Seconds for seek


def parse_command(line: str) -> Optional[Command]:
    """
    Parse one console line. Returns None for a blank line.

    Raises CommandError for unknown commands or bad arguments.
    """
    line = line.strip()
    if not line:
        return None

    # Search keeps the raw remainder so quotes and inner spacing survive
    head, *tail = line.split(None, 1)
    rest = tail[0] if tail else ''
    name = ALIASES.get(head.lower(), head.lower())
    if name == 'search':
        return Command('search', [rest] if rest else [])

    try:
        parts = shlex.split(rest)
    except ValueError as e:
        raise CommandError(str(e)) from e

    if name not in COMMANDS:
        raise CommandError(f'Unknown command: {head}')

    command = Command(name, parts)
    if name in ('play', 'seek', 'cover'):
        command.index = _parse_index(parts, COMMANDS[name][0])
    if name == 'seek':
        if len(parts) < 2:
            raise CommandError(f'Usage: {COMMANDS[name][0]}')
        try:
            command.time = parse_time(parts[1])
        except ValueError as e:
            raise CommandError(str(e)) from e
    if name == 'cover' and len(parts) < 2:
        raise CommandError(f'Usage: {COMMANDS[name][0]}')

    logger.debug(f'Parsed command: {command}')
    return command


def _parse_index(parts: List[str], usage: str) -> int:
    """Item numbers are shown 1-based."""
    if not parts:
        raise CommandError(f'Usage: {usage}')
    try:
        number = int(parts[0])
    except ValueError:
        raise CommandError(f'Not an item number: {parts[0]}') from None
    if number < 1:
        raise CommandError(f'Not an item number: {parts[0]}')
    return number - 1


def help_lines() -> List[str]:
    width = max(len(usage) for usage, _ in COMMANDS.values())
    return [f'   {usage.ljust(width)}   {text}' for usage, text in COMMANDS.values()]
