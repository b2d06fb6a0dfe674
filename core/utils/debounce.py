"""
Debouncer

단일 슬롯 지연 실행 핸들. 새 예약이 들어오면 대기 중인 예약을 취소하고
다시 예약하여 연속된 호출을 한 번의 실행으로 합친다.
"""

import asyncio
import logging
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)


class Debouncer:
    """asyncio 기반 debounce 타이머

    Args:
        delay_seconds: 마지막 예약 이후 실행까지 대기 시간
        name: 로깅용 이름

    사용 예시:
    ```python
    debouncer = Debouncer(2.0, name="cloud-sync")
    debouncer.schedule(push_snapshot)  # 2초 뒤 실행
    debouncer.schedule(push_snapshot)  # 이전 예약 취소 후 재예약
    ```
    """

    def __init__(self, delay_seconds: float, name: str = "debouncer"):
        self.delay_seconds = delay_seconds
        self.name = name
        self._task: asyncio.Task[None] | None = None
        self._inflight: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> bool:
        """대기 중인 예약 존재 여부"""
        return self._task is not None and not self._task.done()

    def schedule(self, callback: Callable[[], Awaitable[None]]) -> bool:
        """지연 실행 예약 (기존 예약은 취소)

        Args:
            callback: 지연 후 실행할 코루틴 함수

        Returns:
            예약 성공 여부 (실행 중인 이벤트 루프가 없으면 False)
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug(f"{self.name}: 실행 중인 이벤트 루프 없음, 예약 생략")
            return False

        self.cancel()
        self._task = loop.create_task(self._run_later(callback))
        return True

    def cancel(self) -> bool:
        """대기 중인 예약 취소

        Returns:
            취소된 예약이 있었는지 여부
        """
        task = self._task
        self._task = None
        if task is not None and not task.done():
            task.cancel()
            return True
        return False

    async def wait(self) -> None:
        """대기 중/실행 중인 작업이 끝날 때까지 대기"""
        tasks = list(self._inflight)
        if self._task is not None:
            tasks.append(self._task)
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def _run_later(self, callback: Callable[[], Awaitable[None]]) -> None:
        """지연 후 콜백 실행"""
        await asyncio.sleep(self.delay_seconds)

        # 실행 시작 이후에는 cancel()이 진행 중인 작업을 끊지 않음
        task = asyncio.current_task()
        if task is not None:
            self._inflight.add(task)
            task.add_done_callback(self._inflight.discard)
        if self._task is task:
            self._task = None

        await callback()
