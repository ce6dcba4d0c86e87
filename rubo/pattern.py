"""Pattern construction for listeners addressed to the robot.

``Robot.respond`` only fires when a line starts with the robot's name or
alias, optionally preceded by ``@`` and followed by ``:`` or ``,``.
The user's pattern is embedded after that prefix, keeping its flags.
"""

import re
from typing import Optional, Pattern, Union

PatternLike = Union[str, Pattern[str]]


def compile_pattern(pattern: PatternLike, flags: int = 0) -> Pattern[str]:
    """Return ``pattern`` compiled, leaving compiled patterns untouched."""
    if isinstance(pattern, str):
        return re.compile(pattern, flags)
    return pattern


def is_anchored(pattern: PatternLike) -> bool:
    """True when the pattern starts with a ``^`` anchor.

    Such a pattern can never match once wrapped by
    ``build_respond_pattern``, since the name prefix comes first.
    """
    source = pattern if isinstance(pattern, str) else pattern.pattern
    return source.startswith("^")


def build_respond_pattern(
    name: str,
    alias: Optional[str],
    pattern: PatternLike,
) -> Pattern[str]:
    """Wrap ``pattern`` so it only matches lines addressed to the robot.

    Args:
        name: Robot name, matched literally.
        alias: Optional alternative prefix (e.g. ``/``), matched literally.
        pattern: User pattern, string or compiled. Flags are preserved.

    Returns:
        Compiled ``^[@]?(?:alias[:,]?|name[:,]?)\\s*(?:pattern)``.
    """
    compiled = compile_pattern(pattern)
    escaped_name = re.escape(str(name))
    if alias:
        escaped_alias = re.escape(str(alias))
        prefix = f"^[@]?(?:{escaped_alias}[:,]?|{escaped_name}[:,]?)"
    else:
        prefix = f"^[@]?{escaped_name}[:,]?"
    return re.compile(rf"{prefix}\s*(?:{compiled.pattern})", compiled.flags)
