# streamstats/infrastructure/concurrency/task_executor.py
import logging
from enum import Enum, auto
from typing import Any, Callable, List, Optional, TypeVar

from streamstats.infrastructure.concurrency.worker_pool import WorkerPool

T = TypeVar("T")


class ExecutionMode(Enum):
    SEQUENTIAL = auto()
    MULTITHREAD = auto()
    MULTIPROCESS = auto()

    @classmethod
    def from_name(cls, name: str) -> "ExecutionMode":
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown execution mode: {name}") from None


class TaskExecutor:
    """
    Runs a list of zero-argument tasks sequentially, on threads or on processes.

    Results always come back in the order the tasks were given.
    """
    def __init__(self, mode: ExecutionMode = ExecutionMode.SEQUENTIAL, max_workers: Optional[int] = None):
        self.mode = mode
        self.max_workers = max_workers
        self.logger = logging.getLogger("infrastructure.concurrency.executor")

        if self.mode == ExecutionMode.MULTITHREAD:
            self.pool = WorkerPool.threads(max_workers)
        elif self.mode == ExecutionMode.MULTIPROCESS:
            self.pool = WorkerPool.processes(max_workers)
        else:
            self.pool = None

    def execute(self, tasks: List[Callable[[], T]]) -> List[T]:
        self.logger.info(f"Executing {len(tasks)} tasks in {self.mode.name} mode")

        if self.mode == ExecutionMode.SEQUENTIAL:
            return [task() for task in tasks]
        return self.pool.execute_tasks(tasks)

    def execute_with_progress(self, tasks: List[Callable[[], T]],
                              progress_callback: Callable[[int, int], Any] = None) -> List[T]:
        """
        Execute tasks and report (completed, total) after each result.

        In the pooled modes all tasks finish first and progress is then reported
        per collected result.
        """
        task_count = len(tasks)
        self.logger.info(f"Executing {task_count} tasks with progress in {self.mode.name} mode")

        if self.mode == ExecutionMode.SEQUENTIAL:
            results = []
            for i, task in enumerate(tasks):
                results.append(task())
                if progress_callback:
                    progress_callback(i + 1, task_count)
            return results

        results = self.pool.execute_tasks(tasks)
        if progress_callback:
            for i in range(task_count):
                progress_callback(i + 1, task_count)
        return results
