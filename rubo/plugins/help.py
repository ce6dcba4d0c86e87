# Description:
#   Generates help commands for rubo.
#
# Commands:
#   rubo help - Displays all of the help commands that rubo knows about.
#   rubo help <query> - Displays all help commands that match <query>.
#
# Notes:
#   Every "rubo" in the listed commands is replaced with the robot's name.

import re

from . import register


@register("help")
def help_commands(robot):

    @robot.respond(r"help(?:\s+(.*))?$", flags=re.IGNORECASE)
    async def show_help(res):
        query = (res.match.group(1) or "").strip()
        registry = robot.command_registry
        commands = registry.search(query) if query else registry.commands

        if not commands:
            await res.send(f"No available commands match {query}")
            return

        name = str(robot.name)
        lines = [re.sub(r"\brubo\b", name, line, flags=re.IGNORECASE) for line in commands]
        await res.send("\n".join(lines))
