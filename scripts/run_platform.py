"""Entry point to start the floodlight platform.

Usage:
    uv run python scripts/run_platform.py           # Use the configured devices
    uv run python scripts/run_platform.py --mock    # Serve a simulated floodlight per device

Each configured device becomes an accessory bound to an in-process hub
service. Accessories with a poll_interval refresh in the background; the
accessory cache is written to ~/.floodlight/accessories.json on shutdown.
"""

import argparse
import asyncio
import logging
import signal
import sys

from dotenv import load_dotenv

from floodlight.devices import MockFloodlight
from floodlight.devices.errors import ValidationError
from floodlight.hub.config import ENV_FILE, FLOODLIGHT_DIR, load_config
from floodlight.hub.platform import FloodlightPlatform
from floodlight.hub.service import LocalService
from floodlight.hub.store import AccessoryStore

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

STORE_FILE = FLOODLIGHT_DIR / "accessories.json"
MOCK_STATE_DIR = FLOODLIGHT_DIR / "mock"


async def main(args: argparse.Namespace) -> int:
    """Main entry point."""
    if ENV_FILE.exists():
        load_dotenv(ENV_FILE)

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValidationError) as e:
        logger.error(str(e))
        return 1

    mocks = []
    if args.mock:
        for device in config.devices:
            mock = MockFloodlight(MOCK_STATE_DIR / f"{device.host}_{device.port}.json")
            await mock.start(device.host, device.port)
            mocks.append(mock)

    platform = FloodlightPlatform(
        config,
        service_factory=lambda context: LocalService(),
        store=AccessoryStore(STORE_FILE),
    )

    # Set up graceful shutdown
    shutdown_event = asyncio.Event()

    def handle_signal():
        logger.info("Shutdown signal received")
        shutdown_event.set()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, handle_signal)

    logger.info("Starting floodlight platform...")
    accessories = await platform.discover_devices()
    for accessory in accessories:
        logger.info(
            f"{accessory.context.name}: on={accessory.context.state.on} "
            f"brightness={accessory.context.state.brightness}"
        )
    logger.info("Press Ctrl+C to stop")

    await shutdown_event.wait()

    logger.info("Stopping platform...")
    await platform.shutdown()
    for mock in mocks:
        await mock.stop()
    logger.info("Platform stopped")

    return 0


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Start the floodlight platform",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--mock",
        action="store_true",
        help="Serve a simulated floodlight on each configured host/port",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to platform config file (default: ~/.floodlight/config.json)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    sys.exit(asyncio.run(main(args)))
