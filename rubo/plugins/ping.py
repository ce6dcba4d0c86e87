# Utility commands surrounding rubo uptime.

import re
from datetime import datetime

from . import register


@register("ping")
def ping(robot):
    robot.add_commands(
        """
        rubo ping - Reply with pong
        rubo echo <text> - Reply back with <text>
        rubo time - Reply with current time
        rubo die - End rubo process
        """
    )

    @robot.respond(r"PING$", flags=re.IGNORECASE)
    async def pong(res):
        await res.send("PONG")

    @robot.respond(r"ECHO (.*)$", flags=re.IGNORECASE)
    async def echo(res):
        await res.send(res.match.group(1))

    @robot.respond(r"TIME$", flags=re.IGNORECASE)
    async def time(res):
        await res.send(f"Server time is: {datetime.now()}")

    @robot.respond(r"DIE$", flags=re.IGNORECASE)
    async def die(res):
        await res.send("Goodbye, cruel world.")
        await robot.shutdown()
