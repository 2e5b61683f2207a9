"""
Main entry point for Flappy.

Loads settings, configures logging and runs the desktop game.
"""

import asyncio
import logging
import sys

from pydantic import ValidationError


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


async def run_game(settings) -> None:
    """Run the desktop game."""
    from flappy.simulator.main import FlappyApp

    app = FlappyApp(settings)
    await app.run()


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv
    from flappy.config.settings import get_settings

    # Load environment variables
    load_dotenv()

    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging()
        logging.getLogger(__name__).error(f"Invalid configuration:\n{e}")
        sys.exit(1)

    setup_logging(settings.debug)

    logger = logging.getLogger(__name__)
    logger.info("Flappy starting...")
    logger.info("Controls: SPACE/UP/W or click - flap, R - retry, M - mute, Q/ESC - quit")

    try:
        asyncio.run(run_game(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("Flappy stopped")


if __name__ == "__main__":
    main()
