"""Shoutrrr CLI transport tests."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from healarr_notify.exceptions import DeliveryError
from healarr_notify.services.transport import ShoutrrrTransport


class FakeProcess:
    """Stand-in for an asyncio subprocess."""

    def __init__(self, returncode: int = 0, stderr: bytes = b"", delay: float = 0) -> None:
        self.returncode: int | None = None
        self._exit_code = returncode
        self._stderr = stderr
        self._delay = delay
        self.killed = False

    async def communicate(self) -> tuple[bytes, bytes]:
        await asyncio.sleep(self._delay)
        self.returncode = self._exit_code
        return b"", self._stderr

    def kill(self) -> None:
        self.killed = True

    async def wait(self) -> int:
        self.returncode = -9
        return self.returncode


def patch_exec(monkeypatch, process: FakeProcess) -> AsyncMock:
    mock = AsyncMock(return_value=process)
    monkeypatch.setattr(asyncio, "create_subprocess_exec", mock)
    return mock


class TestShoutrrrTransport:
    """Test CLI invocation and error mapping."""

    async def test_send_passes_url_and_message_as_arguments(self, monkeypatch) -> None:
        mock = patch_exec(monkeypatch, FakeProcess())

        await ShoutrrrTransport("/usr/bin/shoutrrr").send("discord://t@1", "hello; rm -rf /")

        mock.assert_awaited_once()
        assert mock.call_args.args == (
            "/usr/bin/shoutrrr",
            "send",
            "--url",
            "discord://t@1",
            "--message",
            "hello; rm -rf /",
        )

    async def test_nonzero_exit_raises_with_sanitized_stderr(self, monkeypatch) -> None:
        patch_exec(
            monkeypatch,
            FakeProcess(
                returncode=1,
                stderr=b"error: POST https://discord.com/api/webhooks/1/secret: 401\n",
            ),
        )

        with pytest.raises(DeliveryError) as exc_info:
            await ShoutrrrTransport().send("discord://secret@1", "msg")

        assert exc_info.value.message == "failed to send: error: POST [URL] 401"
        assert "secret" not in exc_info.value.message

    async def test_nonzero_exit_without_stderr(self, monkeypatch) -> None:
        patch_exec(monkeypatch, FakeProcess(returncode=2))

        with pytest.raises(DeliveryError, match="failed to send: exit code 2"):
            await ShoutrrrTransport().send("discord://t@1", "msg")

    async def test_timeout_kills_process(self, monkeypatch) -> None:
        process = FakeProcess(delay=5)
        patch_exec(monkeypatch, process)

        with pytest.raises(DeliveryError, match="transport timed out after 0.05s"):
            await ShoutrrrTransport(timeout=0.05).send("discord://t@1", "msg")

        assert process.killed

    async def test_missing_binary_raises(self) -> None:
        transport = ShoutrrrTransport("/nonexistent/shoutrrr-binary")

        with pytest.raises(DeliveryError, match="failed to start transport"):
            await transport.send("discord://t@1", "msg")
