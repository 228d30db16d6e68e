"""Tests for bounded status polling."""

from unittest.mock import AsyncMock

import httpx
import pytest

from intentswap.exceptions import OneClickAPIError
from intentswap.oneclick.client import OneClickClient
from intentswap.oneclick.models import StatusResponse, SwapStatus
from intentswap.status import TIMEOUT_MESSAGE, poll_status

from conftest import DEPOSIT_ADDRESS, ONECLICK_URL


def status(value: SwapStatus) -> StatusResponse:
    return StatusResponse(status=value, deposit_address=DEPOSIT_ADDRESS)


@pytest.fixture
def sleep() -> AsyncMock:
    return AsyncMock()


class TestPollStatus:
    """Termination and attempt bounds."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "terminal", [SwapStatus.SUCCESS, SwapStatus.REFUNDED, SwapStatus.FAILED]
    )
    async def test_stops_on_terminal_status(self, terminal, sleep):
        client = AsyncMock()
        client.get_status.return_value = status(terminal)

        result = await poll_status(client, DEPOSIT_ADDRESS, sleep=sleep)

        assert result.status == terminal
        assert client.get_status.await_count == 1
        sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_polls_until_terminal(self, sleep):
        client = AsyncMock()
        client.get_status.side_effect = [
            status(SwapStatus.PENDING_DEPOSIT),
            status(SwapStatus.PROCESSING),
            status(SwapStatus.SUCCESS),
        ]

        result = await poll_status(client, DEPOSIT_ADDRESS, interval=2.0, sleep=sleep)

        assert result.status == SwapStatus.SUCCESS
        assert client.get_status.await_count == 3
        assert sleep.await_count == 2
        sleep.assert_awaited_with(2.0)

    @pytest.mark.asyncio
    async def test_never_exceeds_max_attempts(self, sleep):
        client = AsyncMock()
        client.get_status.return_value = status(SwapStatus.PROCESSING)

        result = await poll_status(client, DEPOSIT_ADDRESS, max_attempts=4, sleep=sleep)

        assert client.get_status.await_count == 4
        assert sleep.await_count == 3
        assert result.timed_out
        assert result.status == SwapStatus.PROCESSING
        assert result.error == TIMEOUT_MESSAGE

    @pytest.mark.asyncio
    async def test_errors_count_as_attempts(self, sleep):
        client = AsyncMock()
        client.get_status.side_effect = [
            OneClickAPIError("get status", 502, "bad gateway"),
            httpx.ConnectError("refused"),
            status(SwapStatus.REFUNDED),
        ]

        result = await poll_status(client, DEPOSIT_ADDRESS, max_attempts=3, sleep=sleep)

        assert result.status == SwapStatus.REFUNDED
        assert client.get_status.await_count == 3

    @pytest.mark.asyncio
    async def test_sync_callback(self, sleep):
        seen = []
        client = AsyncMock()
        client.get_status.side_effect = [status(SwapStatus.PROCESSING), status(SwapStatus.SUCCESS)]

        await poll_status(client, DEPOSIT_ADDRESS, on_update=seen.append, sleep=sleep)

        assert [s.status for s in seen] == [SwapStatus.PROCESSING, SwapStatus.SUCCESS]

    @pytest.mark.asyncio
    async def test_async_callback(self, sleep):
        on_update = AsyncMock()
        client = AsyncMock()
        client.get_status.return_value = status(SwapStatus.FAILED)

        await poll_status(client, DEPOSIT_ADDRESS, on_update=on_update, sleep=sleep)

        on_update.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_against_fake_service(self, oneclick_client, fake_oneclick, sleep):
        fake_oneclick.statuses = ["PENDING_DEPOSIT", "PROCESSING", "SUCCESS"]

        result = await poll_status(oneclick_client, DEPOSIT_ADDRESS, sleep=sleep)

        assert result.status == SwapStatus.SUCCESS
        assert len(fake_oneclick.calls("/v0/status")) == 3


def scripted_client(*responses: httpx.Response) -> OneClickClient:
    """Client whose status endpoint replays ``responses`` in order."""
    queue = list(responses)

    def handler(request: httpx.Request) -> httpx.Response:
        return queue.pop(0) if len(queue) > 1 else queue[0]

    return OneClickClient(ONECLICK_URL, transport=httpx.MockTransport(handler))


class TestUnreadableStatus:
    """Bodies the client cannot decode count as failed attempts."""

    @pytest.mark.asyncio
    async def test_unknown_status_value(self, sleep):
        client = scripted_client(
            httpx.Response(200, json={"status": "SETTLING_SOMEHOW"}),
            httpx.Response(200, json={"status": "SUCCESS"}),
        )

        result = await poll_status(client, DEPOSIT_ADDRESS, max_attempts=5, sleep=sleep)

        assert result.status == SwapStatus.SUCCESS
        assert sleep.await_count == 1

    @pytest.mark.asyncio
    async def test_non_json_body(self, sleep):
        client = scripted_client(
            httpx.Response(200, text="<html>maintenance</html>"),
            httpx.Response(200, json={"status": "REFUNDED"}),
        )

        result = await poll_status(client, DEPOSIT_ADDRESS, max_attempts=5, sleep=sleep)

        assert result.status == SwapStatus.REFUNDED

    @pytest.mark.asyncio
    async def test_unreadable_until_exhausted(self, sleep):
        client = scripted_client(httpx.Response(200, text="not json"))

        result = await poll_status(client, DEPOSIT_ADDRESS, max_attempts=3, sleep=sleep)

        assert result.timed_out
        assert sleep.await_count == 2

    @pytest.mark.asyncio
    async def test_known_deposit_tx_is_not_terminal(self, sleep):
        client = scripted_client(
            httpx.Response(200, json={"status": "KNOWN_DEPOSIT_TX"}),
            httpx.Response(200, json={"status": "SUCCESS"}),
        )
        seen = []

        result = await poll_status(
            client, DEPOSIT_ADDRESS, on_update=seen.append, max_attempts=5, sleep=sleep
        )

        assert [s.status for s in seen] == [SwapStatus.KNOWN_DEPOSIT_TX, SwapStatus.SUCCESS]
        assert result.status == SwapStatus.SUCCESS

    @pytest.mark.asyncio
    async def test_client_raises_typed_error(self):
        client = scripted_client(httpx.Response(200, json={"status": "SETTLING_SOMEHOW"}))

        with pytest.raises(OneClickAPIError) as exc_info:
            await client.get_status(DEPOSIT_ADDRESS)

        assert exc_info.value.status_code == 200
        assert "SETTLING_SOMEHOW" in exc_info.value.body
