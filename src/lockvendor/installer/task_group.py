"""
A group of independent tasks run on a thread pool.

Every task runs to completion; a failing task never cancels its siblings.
Outcomes are collected in completion order.
"""

from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple


@dataclass
class TaskOutcome:
    """Result of one task: ``error`` is None on success."""

    key: str
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class InstallTaskGroup:
    """
    Collects tasks with ``go`` and runs them all on ``wait``.

    Unless ``max_workers`` is given the pool has one worker per task, so all
    tasks start promptly.
    """

    def __init__(self, max_workers: Optional[int] = None):
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be positive, got {max_workers}")
        self.max_workers = max_workers
        self._tasks: List[Tuple[str, Callable[[], None]]] = []

    def go(self, key: str, fn: Callable[[], None]) -> None:
        """Register a task; it starts when ``wait`` is called."""
        self._tasks.append((key, fn))

    def __len__(self) -> int:
        return len(self._tasks)

    def wait(self) -> List[TaskOutcome]:
        """
        Run every registered task and block until all of them have finished.

        Returns:
            One TaskOutcome per task, in completion order
        """
        if not self._tasks:
            return []

        tasks, self._tasks = self._tasks, []
        workers = self.max_workers if self.max_workers is not None else len(tasks)
        outcomes: List[TaskOutcome] = []

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="lockvendor") as pool:
            futures: Dict[Future, str] = {pool.submit(fn): key for key, fn in tasks}
            for future in as_completed(futures):
                outcomes.append(TaskOutcome(key=futures[future], error=future.exception()))

        return outcomes
