"""Ordered task execution with deterministic failure reporting."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Sequence, TypeVar

_ResultT = TypeVar("_ResultT")


def run_in_order(tasks: Sequence[Callable[[], _ResultT]], max_workers: int) -> list[_ResultT]:
    """Run tasks and return their results in task order.

    With more than one worker, tasks run on a thread pool. When several
    tasks fail, the failure of the lowest-index task is raised.

    Args:
        tasks: Zero-argument callables.
        max_workers: Pool size; 1 runs tasks sequentially and stops early.

    Returns:
        Task results in the same order as ``tasks``.
    """
    if max_workers <= 1 or len(tasks) <= 1:
        return [task() for task in tasks]
    with ThreadPoolExecutor(max_workers=min(max_workers, len(tasks))) as executor:
        futures: list[Future[_ResultT]] = [executor.submit(task) for task in tasks]
        try:
            return [future.result() for future in futures]
        except BaseException:
            for future in futures:
                future.cancel()
            raise
