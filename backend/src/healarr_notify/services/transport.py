"""Delivery transports for provider URLs."""

import asyncio
import logging
from typing import Protocol

from healarr_notify.exceptions import DeliveryError
from healarr_notify.utils.secure_logging import redact_url, sanitize_exception_message

logger = logging.getLogger(__name__)

MAX_STDERR = 500


class Transport(Protocol):
    """Sends a message to a provider connection URL."""

    async def send(self, url: str, message: str) -> None:
        """Send a message.

        Raises:
            DeliveryError: If the message could not be delivered
        """
        ...


class ShoutrrrTransport:
    """Transport that runs the shoutrrr CLI for each message.

    Runs `shoutrrr send --url <url> --message <message>` without a shell,
    so URLs and messages are never interpreted.
    """

    def __init__(self, binary: str = "shoutrrr", timeout: float = 30.0) -> None:
        """Initialize transport.

        Args:
            binary: Path or name of the shoutrrr executable
            timeout: Maximum seconds per send
        """
        self.binary = binary
        self.timeout = timeout

    async def send(self, url: str, message: str) -> None:
        try:
            process = await asyncio.create_subprocess_exec(
                self.binary,
                "send",
                "--url",
                url,
                "--message",
                message,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise DeliveryError(f"failed to start transport: {e.strerror or type(e).__name__}") from e

        try:
            async with asyncio.timeout(self.timeout):
                _, stderr = await process.communicate()
        except TimeoutError:
            process.kill()
            await process.wait()
            raise DeliveryError(f"transport timed out after {self.timeout}s") from None

        if process.returncode != 0:
            detail = sanitize_exception_message(stderr.decode("utf-8", errors="replace").strip())
            logger.debug(f"Transport failed for {redact_url(url)} (exit code {process.returncode})")
            if not detail:
                detail = f"exit code {process.returncode}"
            raise DeliveryError(f"failed to send: {detail[:MAX_STDERR]}")
