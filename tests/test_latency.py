from unittest.mock import AsyncMock, patch

import pytest

from campus_admin_api.app.core.latency import DELAYS_MS, Latency


def test_delays_per_operation():
    latency = Latency(1.0)
    assert latency.seconds("list") == pytest.approx(0.3)
    assert latency.seconds("get") == pytest.approx(0.2)
    assert latency.seconds("create") == pytest.approx(0.4)
    assert latency.seconds("update") == pytest.approx(0.35)
    assert latency.seconds("delete") == pytest.approx(0.25)
    assert Latency(0.5).seconds("create") == pytest.approx(0.2)


def test_negative_scale_is_rejected():
    with pytest.raises(ValueError):
        Latency(-1)


def test_unknown_operation():
    with pytest.raises(KeyError):
        Latency().seconds("bogus")


async def test_wait_sleeps_for_scaled_delay():
    with patch("campus_admin_api.app.core.latency.asyncio.sleep", new_callable=AsyncMock) as sleep:
        await Latency(0.01).wait("list")
    sleep.assert_awaited_once_with(pytest.approx(DELAYS_MS["list"] * 0.01 / 1000))


async def test_zero_scale_does_not_sleep():
    with patch("campus_admin_api.app.core.latency.asyncio.sleep", new_callable=AsyncMock) as sleep:
        await Latency(0).wait("create")
    sleep.assert_not_awaited()
