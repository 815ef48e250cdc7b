"""
Tests for the SQLAlchemy Unit of Work and its post-commit hooks.
"""
import logging

import pytest

from order_service.db.connection import get_session_maker
from order_service.domain import Order
from order_service.domain.unit_of_work import run_hooks, unit_of_work


def new_uow():
    return unit_of_work(get_session_maker()())


@pytest.mark.asyncio
async def test_commit_persists_and_runs_hooks(customer_id, laptop_and_mice):
    order = Order.create(customer_id, laptop_and_mice)
    calls = []

    async with new_uow() as uow:
        await uow.orders.add(order)
        uow.add_post_commit_hook(lambda: calls.append("sync"))

        async def async_hook():
            calls.append("async")

        uow.add_post_commit_hook(async_hook)
        assert calls == []

    assert calls == ["sync", "async"]

    async with new_uow() as uow:
        assert await uow.orders.get_by_id(order.order_id) is not None


@pytest.mark.asyncio
async def test_exception_rolls_back_and_skips_hooks(customer_id, laptop_and_mice):
    order = Order.create(customer_id, laptop_and_mice)
    calls = []

    with pytest.raises(RuntimeError):
        async with new_uow() as uow:
            await uow.orders.add(order)
            uow.add_post_commit_hook(lambda: calls.append("hook"))
            raise RuntimeError("abort")

    assert calls == []

    async with new_uow() as uow:
        assert await uow.orders.get_by_id(order.order_id) is None


@pytest.mark.asyncio
async def test_hooks_cleared_after_commit():
    calls = []
    uow = new_uow()
    uow.add_post_commit_hook(lambda: calls.append(1))

    await uow.commit()
    await uow.commit()
    await uow.close()

    assert calls == [1]


@pytest.mark.asyncio
async def test_failing_hook_is_logged_and_others_run(caplog):
    calls = []

    def broken():
        raise RuntimeError("publisher down")

    with caplog.at_level(logging.ERROR):
        await run_hooks([broken, lambda: calls.append("after")])

    assert calls == ["after"]
    assert "publisher down" in caplog.text
