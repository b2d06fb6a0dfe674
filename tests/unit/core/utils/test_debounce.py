"""
core/utils/debounce.py 테스트

단일 슬롯 예약/취소/재예약
"""

import asyncio

import pytest

from core.utils.debounce import Debouncer


def make_counter():
    calls: list[int] = []

    async def callback() -> None:
        calls.append(1)

    return calls, callback


class TestDebouncer:
    """Debouncer 동작"""

    @pytest.mark.asyncio
    async def test_runs_after_delay(self) -> None:
        calls, callback = make_counter()
        debouncer = Debouncer(0.01)

        assert debouncer.schedule(callback)
        assert debouncer.pending

        await debouncer.wait()

        assert calls == [1]
        assert not debouncer.pending

    @pytest.mark.asyncio
    async def test_reschedule_coalesces(self) -> None:
        calls, callback = make_counter()
        debouncer = Debouncer(0.02)

        for _ in range(5):
            debouncer.schedule(callback)

        await debouncer.wait()

        assert calls == [1]

    @pytest.mark.asyncio
    async def test_cancel(self) -> None:
        calls, callback = make_counter()
        debouncer = Debouncer(0.01)
        debouncer.schedule(callback)

        assert debouncer.cancel()
        await asyncio.sleep(0.03)

        assert calls == []
        assert debouncer.cancel() is False

    def test_no_running_loop(self) -> None:
        _, callback = make_counter()
        debouncer = Debouncer(0.01)

        assert debouncer.schedule(callback) is False
        assert not debouncer.pending

    @pytest.mark.asyncio
    async def test_cancel_does_not_interrupt_running_callback(self) -> None:
        started = asyncio.Event()
        finished: list[bool] = []

        async def slow() -> None:
            started.set()
            await asyncio.sleep(0.02)
            finished.append(True)

        debouncer = Debouncer(0)
        debouncer.schedule(slow)
        await started.wait()

        assert debouncer.cancel() is False
        await debouncer.wait()

        assert finished == [True]

    def test_cancel_without_schedule(self) -> None:
        debouncer = Debouncer(0.01)

        assert debouncer.cancel() is False
        assert not debouncer.pending

    @pytest.mark.asyncio
    async def test_cancel_after_completion(self) -> None:
        calls, callback = make_counter()
        debouncer = Debouncer(0)
        debouncer.schedule(callback)
        await debouncer.wait()

        assert calls == [1]
        assert debouncer.cancel() is False
        assert not debouncer.pending
