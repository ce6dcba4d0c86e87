"""Main entry point for rubo.

Initializes logging in two phases (defaults then config-driven), builds
the Robot, loads plugins once the adapter reports ``connected``, and
runs the adapter loop with cooperative shutdown on SIGTERM/SIGINT.

Key functions:
    main: Async entry point.
    run: Synchronous wrapper for the ``rubo`` console script.
"""

import asyncio
import signal
import sys

import structlog

from .logging_config import setup_logging


async def main():
    """Main async entry point."""
    setup_logging()
    logger = structlog.get_logger("rubo")

    from .config import get_config
    from .robot import Robot

    config = get_config()
    config.validate()
    setup_logging(config)

    logger.info("rubo_starting", name=config.name, adapter=config.adapter)

    robot = Robot(
        config.adapter,
        name=config.name,
        alias=config.alias,
        logger=structlog.get_logger("rubo.robot"),
    )

    def load_plugins():
        robot.load_plugins(*config.plugins)
        logger.info(
            "plugins_loaded",
            listeners=len(robot.listeners),
            commands=len(robot.commands),
        )

    robot.adapter.events.once("connected", load_plugins)

    loop = asyncio.get_running_loop()
    shutdown_event = asyncio.Event()

    def handle_shutdown(sig):
        logger.info("shutdown_signal_received", signal=sig.name)
        shutdown_event.set()

    for sig in (signal.SIGTERM, signal.SIGINT):
        try:
            loop.add_signal_handler(sig, handle_shutdown, sig)
        except NotImplementedError:
            if sig == signal.SIGINT:
                signal.signal(
                    signal.SIGINT,
                    lambda s, f: handle_shutdown(signal.SIGINT),
                )

    robot_task = asyncio.create_task(robot.run())
    stop_task = asyncio.create_task(shutdown_event.wait())
    try:
        done, _ = await asyncio.wait(
            {robot_task, stop_task}, return_when=asyncio.FIRST_COMPLETED
        )
        if robot_task in done:
            robot_task.result()
    finally:
        stop_task.cancel()
        await robot.shutdown()
        if not robot_task.done():
            robot_task.cancel()
            try:
                await robot_task
            except asyncio.CancelledError:
                pass
        logger.info("rubo_stopped")


def run():
    """Synchronous entry point for the ``rubo`` console script."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
    except SystemExit as e:
        sys.exit(e.code)


if __name__ == "__main__":
    run()
