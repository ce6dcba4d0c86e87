"""Human-readable command help contributed by plugins.

Plugins add lines either directly (``robot.add_commands``) or through a
comment block in their module source::

    # Commands:
    #   rubo ping - Reply with pong

``parse_help`` collects every non-empty comment line under a
``Commands:`` header. Lines are stored verbatim and sorted on read.
"""

import re
from typing import Iterable, List

_SECTION_RE = re.compile(r"(\S+):")
_CODING_RE = re.compile(r"coding[:=]\s*\S+")


def parse_help(source: str) -> List[str]:
    """Extract command help lines from the comments in ``source``.

    Only lines whose first character is ``#`` are considered. A line
    containing ``<word>:`` opens a section named after the lower-cased
    word; while the open section is ``commands``, every other comment
    line is stripped and kept.
    """
    lines = [
        line[1:].rstrip("\r\n")
        for line in source.splitlines()
        if line.startswith("#")
    ]
    lines = [line for line in lines if line]
    if lines and _CODING_RE.search(lines[0]):
        lines.pop(0)

    commands: List[str] = []
    section = None
    for line in lines:
        header = _SECTION_RE.search(line)
        if header:
            section = header.group(1).lower()
        elif section == "commands":
            command = line.strip()
            if command:
                commands.append(command)
    return commands


class CommandRegistry:
    """Ordered collection of command help lines.

    Duplicates are kept; ``commands`` returns a sorted copy.
    """

    def __init__(self):
        self._commands: List[str] = []

    def add(self, *lines: str) -> None:
        for line in lines:
            self._commands.append(line)

    def add_block(self, text: str) -> None:
        """Add every non-blank line of ``text``, stripped."""
        self.extend(line.strip() for line in text.splitlines())

    def extend(self, lines: Iterable[str]) -> None:
        self._commands.extend(line for line in lines if line)

    def add_from_source(self, source: str) -> List[str]:
        found = parse_help(source)
        self._commands.extend(found)
        return found

    @property
    def commands(self) -> List[str]:
        return sorted(self._commands)

    def search(self, query: str) -> List[str]:
        """Sorted commands containing ``query`` (case-insensitive)."""
        needle = query.lower()
        return [c for c in self.commands if needle in c.lower()]

    def __len__(self) -> int:
        return len(self._commands)
