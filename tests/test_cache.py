"""Tests for SingleValueCache behaviours not observable through the client.

Failure and refresh semantics of the slot are exercised directly here; the
account caching seen by callers is covered in test_account.py.
"""

from unittest.mock import AsyncMock

import pytest

from cloudcontrol_client import cache


async def test_empty_cache_fetches():
    """An empty slot always invokes fetch_func."""
    fetch_func = AsyncMock(return_value="account")
    c = cache.SingleValueCache[str]("test")

    value = await c.get_or_fetch(fetch_func)

    assert value == "account"
    assert c.value == "account"
    fetch_func.assert_awaited_once()


async def test_populated_cache_skips_fetch():
    """A populated slot is returned without invoking fetch_func."""
    fetch_func = AsyncMock(return_value="fresh")
    c = cache.SingleValueCache[str]("test", value="cached")

    value = await c.get_or_fetch(fetch_func)

    assert value == "cached"
    fetch_func.assert_not_awaited()


async def test_refresh_overwrites_value():
    """refresh=True fetches and replaces the cached value."""
    fetch_func = AsyncMock(return_value="fresh")
    c = cache.SingleValueCache[str]("test", value="cached")

    value = await c.get_or_fetch(fetch_func, refresh=True)

    assert value == "fresh"
    assert c.value == "fresh"


async def test_failed_fetch_keeps_previous_value():
    """A fetch that raises leaves the slot unchanged."""
    fetch_func = AsyncMock(side_effect=RuntimeError("boom"))
    c = cache.SingleValueCache[str]("test", value="cached")

    with pytest.raises(RuntimeError):
        await c.get_or_fetch(fetch_func, refresh=True)

    assert c.value == "cached"


def test_clear_empties_slot():
    """clear() drops the cached value."""
    c = cache.SingleValueCache[str]("test", value="cached")

    c.clear()

    assert c.value is None


async def test_last_write_wins():
    """Successive refreshes leave the most recent value in the slot."""
    fetch_func = AsyncMock(side_effect=["first", "second"])
    c = cache.SingleValueCache[str]("test")

    await c.get_or_fetch(fetch_func, refresh=True)
    await c.get_or_fetch(fetch_func, refresh=True)

    assert c.value == "second"
