import logging
from typing import Any, Awaitable, Callable, List, Optional, TypeVar

from tripsplit.core.errors import RollbackError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class WriteCoordinator:
    """
    Best-effort saga for writes that span several records.

    Usage::

        async with WriteCoordinator("create expense") as saga:
            expense = await saga.step(lambda: store.insert(expense), store.remove)
            for split in splits:
                await saga.step(partial(store.insert, split), store.remove)

    Each successful step pushes its compensation. If anything raises inside
    the block, compensations run newest-first and the original error is
    re-raised. A failing compensation is logged at CRITICAL and the remaining
    ones still run; afterwards the failure surfaces as ``RollbackError``
    chained to the first compensation error. A crash between a write and its
    compensation can still leave a partial write behind.
    """

    def __init__(self, label: str):
        self.label = label
        self._compensations: List[Callable[[], Awaitable[Any]]] = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if exc_type is None:
            self._compensations.clear()
            return False

        if self._compensations:
            logger.warning(
                "%s failed (%s), rolling back %d step(s)",
                self.label, exc, len(self._compensations),
            )
            await self.rollback()

        return False

    async def step(
        self,
        action: Callable[[], Awaitable[T]],
        compensate: Optional[Callable[[T], Awaitable[Any]]] = None,
    ) -> T:
        result = await action()

        if compensate is not None:
            self._compensations.append(lambda: compensate(result))

        return result

    async def rollback(self):
        first_error = None
        failures = 0

        while self._compensations:
            undo = self._compensations.pop()
            try:
                await undo()
            except Exception as e:
                failures += 1
                logger.critical(
                    "Rollback step of %s failed, data may be inconsistent: %s", self.label, e
                )
                if first_error is None:
                    first_error = e

        if first_error is not None:
            raise RollbackError(
                f"Rollback of {self.label} failed ({failures} step(s))"
            ) from first_error
