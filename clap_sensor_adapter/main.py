"""
Service runner for the clap sensor adapter.

Wires the configured clap detector, an in-process addon manager and the
adapter together, then keeps the event loop alive until a stop signal:

1. Load configuration and set up logging
2. Build the clap detector from configuration
3. Bind the detector's channel to the running event loop
4. Load the adapter and its pre-provisioned device
5. Wait for SIGINT/SIGTERM, then stop the detector
"""

import asyncio
import logging
from logging.handlers import RotatingFileHandler
import signal
import sys
from pathlib import Path
from typing import Optional

from .config import load_config
from .detection.clap_factory import get_clap_provider
from .detection.clap_interface import ClapDetectorProvider
from .gateway.manager import AddonManager
from .gateway.models import AddonManifest
from .loader import load_clap_sensor_adapter
from .sensor.adapter import ClapSensorAdapter

logger = logging.getLogger(__name__)


class ClapSensorService:
    """
    Runs the clap sensor adapter as a standalone process.

    Handles component lifecycle, load errors and graceful shutdown.
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the service.

        Args:
            config_path: Optional path to config.yaml. If None, uses default.
        """
        self.config = load_config(config_path)
        self._setup_logging()

        self.manager = AddonManager()
        self.detector: ClapDetectorProvider = get_clap_provider(
            provider_name=self.config.detector.provider,
            config=self.config.detector.model_dump(),
        )
        self.adapter: Optional[ClapSensorAdapter] = None
        self.load_errors: list[str] = []

        self.running = False
        self._stop_event: Optional[asyncio.Event] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

        logger.info("Clap sensor service initialized")

    def _setup_logging(self) -> None:
        """Configure logging based on config settings."""
        log_config = self.config.logging

        log_file = Path(log_config.file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        root_logger = logging.getLogger()
        root_logger.setLevel(log_config.level)
        root_logger.handlers.clear()

        file_handler = RotatingFileHandler(
            log_config.file,
            maxBytes=log_config.max_bytes,
            backupCount=log_config.backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(log_config.level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        root_logger.addHandler(file_handler)

        if log_config.console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(log_config.level)
            console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
            root_logger.addHandler(console_handler)

        third_party_level = getattr(logging, log_config.third_party_level)
        for logger_name in ("pyaudio", "asyncio"):
            logging.getLogger(logger_name).setLevel(third_party_level)

        logger.info(
            f"Logging configured: level={log_config.level}, file={log_config.file}, "
            f"backups={log_config.backup_count}"
        )

    def _on_load_error(self, package_name: str, message: str) -> None:
        logger.error(f"Add-on {package_name} reported an error: {message}")
        self.load_errors.append(message)

    async def run(self) -> None:
        """
        Load the adapter and serve clap events until ``stop`` is called.
        """
        self._loop = asyncio.get_running_loop()
        self._stop_event = asyncio.Event()
        self.detector.channel.bind_loop(self._loop)

        manifest = AddonManifest(name=self.config.adapter.package_name)
        self.adapter = load_clap_sensor_adapter(
            self.manager,
            manifest,
            self._on_load_error,
            detector=self.detector,
        )
        self.running = True

        logger.info("Clap sensor service running")
        try:
            await self._stop_event.wait()
        finally:
            self._shutdown()

    def stop(self) -> None:
        """
        Request shutdown. Safe to call from any thread and more than once.
        """
        if self._loop is None or self._stop_event is None or self._loop.is_closed():
            return
        self._loop.call_soon_threadsafe(self._stop_event.set)

    def _shutdown(self) -> None:
        if not self.running:
            return

        logger.info("Stopping clap sensor service...")
        self.running = False

        try:
            self.detector.stop()
        except Exception as e:
            logger.error(f"Error stopping clap detector: {e}")

        self.detector.channel.bind_loop(None)
        logger.info("Clap sensor service stopped")

    def start(self) -> None:
        """
        Run the service in the foreground with signal handlers installed.
        """
        def signal_handler(signum, frame):
            logger.info(f"Received signal {signum}")
            self.stop()

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

        print("\n[*] Clap sensor adapter running. Press Ctrl+C to stop\n")
        asyncio.run(self.run())
        print("[+] Shutdown complete")


def main():
    """CLI entry point for the clap sensor adapter."""
    try:
        service = ClapSensorService(sys.argv[1] if len(sys.argv) > 1 else None)
        service.start()

    except FileNotFoundError as e:
        print(f"\n[!] Configuration Error: {str(e)}")
        sys.exit(1)

    except ValueError as e:
        print(f"\n[!] Configuration Error: {str(e)}")
        sys.exit(1)

    except Exception as e:
        logger.error(f"Fatal error: {str(e)}", exc_info=True)
        print(f"\n[!] Fatal Error: {str(e)}")
        sys.exit(1)


if __name__ == "__main__":
    main()
