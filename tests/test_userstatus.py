from datetime import timedelta

import httpx
import pytest
import respx

from myopicbot.lichess import LichessError
from myopicbot.userstatus import (
    STATUS_ENDPOINT,
    StatusService,
    UserStatus,
    fetch_user_status,
    parse_user_statuses,
)


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_deserialize_with_flag_absent():
    assert parse_user_statuses('[{"id": "id"}]') == [UserStatus(id="id", online=False)]


def test_deserialize_with_flag_present():
    text = """[{
        "id": "id",
        "online": true
    }]"""
    assert parse_user_statuses(text) == [UserStatus(id="id", online=True)]


def test_non_array_rejected():
    with pytest.raises(ValueError):
        parse_user_statuses('{"id": "id"}')


def test_missing_id_rejected():
    with pytest.raises(ValueError):
        UserStatus.from_json({"online": True})


@pytest.mark.asyncio
async def test_fetch_user_status_takes_first():
    with respx.mock() as router:
        route = router.get(STATUS_ENDPOINT, params={"ids": "myopic-bot"}).mock(
            return_value=httpx.Response(200, json=[{"id": "myopic-bot", "online": True}])
        )
        async with httpx.AsyncClient() as client:
            status = await fetch_user_status(client, "myopic-bot")
    assert status == UserStatus(id="myopic-bot", online=True)
    assert route.call_count == 1


@pytest.mark.asyncio
async def test_fetch_user_status_empty_list_raises():
    with respx.mock() as router:
        router.get(STATUS_ENDPOINT).mock(return_value=httpx.Response(200, json=[]))
        async with httpx.AsyncClient() as client:
            with pytest.raises(LichessError, match="No statuses for myopic-bot"):
                await fetch_user_status(client, "myopic-bot")


@pytest.mark.asyncio
async def test_fetch_user_status_connection_error_raises():
    with respx.mock() as router:
        router.get(STATUS_ENDPOINT).mock(side_effect=httpx.ConnectError("refused"))
        async with httpx.AsyncClient() as client:
            with pytest.raises(LichessError):
                await fetch_user_status(client, "myopic-bot")


@pytest.mark.asyncio
async def test_service_does_not_poll_before_gap():
    clock = FakeClock()
    with respx.mock(assert_all_called=False) as router:
        route = router.get(STATUS_ENDPOINT).mock(
            return_value=httpx.Response(200, json=[{"id": "myopic-bot"}])
        )
        async with httpx.AsyncClient() as client:
            service = StatusService("myopic-bot", timedelta(seconds=5), client, clock)
            clock.now = 5.0
            assert await service.user_status() is None
    assert route.call_count == 0


@pytest.mark.asyncio
async def test_service_polls_after_gap_then_waits_again():
    clock = FakeClock()
    with respx.mock() as router:
        route = router.get(STATUS_ENDPOINT).mock(
            return_value=httpx.Response(200, json=[{"id": "myopic-bot"}])
        )
        async with httpx.AsyncClient() as client:
            service = StatusService("myopic-bot", timedelta(seconds=5), client, clock)
            clock.now = 6.0
            first = await service.user_status()
            second = await service.user_status()
    assert first == UserStatus(id="myopic-bot", online=False)
    assert second is None
    assert route.call_count == 1