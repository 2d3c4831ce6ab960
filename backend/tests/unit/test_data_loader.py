"""Unit tests for the DataLoader fan-out and per-source settling."""

import asyncio

import pytest

from wms.application.services import DataLoader, LoadSource
from wms.domain.entities import NoticeLevel
from wms.infrastructure.notifications import CollectingNotifier


def _returns(value):
    async def fetch():
        await asyncio.sleep(0)
        return value

    return fetch


def _raises(exc: Exception):
    async def fetch():
        raise exc

    return fetch


@pytest.mark.asyncio
async def test_all_sources_succeed():
    notifier = CollectingNotifier()
    loader = DataLoader(
        LoadSource("sales_orders", _returns(["SO-001"])),
        [LoadSource("customers", _returns(["CUS-001"])), LoadSource("inventory", _returns([]))],
        notifier=notifier,
        label="sales orders",
    )

    result = await loader.load()

    assert not result.failed
    assert result.data("sales_orders") == ["SO-001"]
    assert result.data("customers") == ["CUS-001"]
    assert notifier.notices == []


@pytest.mark.asyncio
async def test_failed_secondary_falls_back_to_its_default():
    notifier = CollectingNotifier()
    loader = DataLoader(
        LoadSource("sales_orders", _returns(["SO-001"])),
        [
            LoadSource("customers", _raises(RuntimeError("down"))),
            LoadSource("summary", _raises(RuntimeError("down")), default=dict),
        ],
        notifier=notifier,
    )

    result = await loader.load()

    assert not result.failed
    assert result.data("sales_orders") == ["SO-001"]
    assert result.data("customers") == []
    assert result.data("summary") == {}
    assert not result.secondaries["customers"].ok
    assert isinstance(result.secondaries["customers"].error, RuntimeError)
    assert notifier.notices == []


@pytest.mark.asyncio
async def test_failed_primary_raises_an_error_notice():
    notifier = CollectingNotifier()
    loader = DataLoader(
        LoadSource("inventory", _raises(RuntimeError("boom"))),
        [LoadSource("suppliers", _returns(["SUP-001"]))],
        notifier=notifier,
        label="inventory items",
    )

    result = await loader.load()

    assert result.failed
    assert result.data("inventory") == []
    assert result.data("suppliers") == ["SUP-001"]
    assert [(n.level, n.message) for n in notifier.notices] == [
        (NoticeLevel.ERROR, "Failed to load inventory items")
    ]


@pytest.mark.asyncio
async def test_is_loading_spans_the_load_and_resets():
    started = asyncio.Event()
    release = asyncio.Event()

    async def slow():
        started.set()
        await release.wait()
        return []

    loader = DataLoader(LoadSource("inventory", slow))
    task = asyncio.create_task(loader.load())
    await started.wait()
    assert loader.is_loading

    release.set()
    await task
    assert not loader.is_loading


@pytest.mark.asyncio
async def test_sources_are_fetched_concurrently():
    order: list[str] = []

    def tracked(name: str, delay: float):
        async def fetch():
            order.append(f"start:{name}")
            await asyncio.sleep(delay)
            order.append(f"end:{name}")
            return []

        return fetch

    loader = DataLoader(
        LoadSource("primary", tracked("primary", 0.02)),
        [LoadSource("secondary", tracked("secondary", 0.0))],
    )
    await loader.load()

    assert order[:2] == ["start:primary", "start:secondary"]
