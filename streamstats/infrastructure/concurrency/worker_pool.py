# streamstats/infrastructure/concurrency/worker_pool.py
import concurrent.futures
import logging
import multiprocessing
from typing import Callable, List, Optional, Type, TypeVar

T = TypeVar("T")


class TaskFailedError(RuntimeError):
    """A pooled task raised; the original exception is chained as __cause__."""
    def __init__(self, index: int, total: int, error: BaseException):
        self.index = index
        self.total = total
        super().__init__(f"Task {index + 1}/{total} failed: {type(error).__name__}: {error}")


class WorkerPool:
    """
    Runs zero-argument tasks on a concurrent.futures executor and returns
    their results in submission order.

    Use `WorkerPool.threads()` for tasks that release the GIL (numpy-heavy
    statistics) and `WorkerPool.processes()` otherwise. With processes, tasks
    and results are pickled: shard tasks must be module-level functions or
    functools.partial objects, and statistics must hold module-level
    callables only.
    """
    def __init__(self, executor_cls: Type[concurrent.futures.Executor], max_workers: Optional[int] = None):
        self.executor_cls = executor_cls
        self.max_workers = max_workers
        self.logger = logging.getLogger("infrastructure.concurrency.worker_pool")

    @classmethod
    def threads(cls, max_workers: Optional[int] = None) -> "WorkerPool":
        return cls(concurrent.futures.ThreadPoolExecutor, max_workers)

    @classmethod
    def processes(cls, max_workers: Optional[int] = None) -> "WorkerPool":
        # Leave one core to the process that merges the results
        return cls(concurrent.futures.ProcessPoolExecutor,
                   max_workers or max(1, multiprocessing.cpu_count() - 1))

    def execute_tasks(self, tasks: List[Callable[[], T]]) -> List[T]:
        """
        Run every task and wait for all of them.

        Args:
            tasks: List of callable tasks

        Returns:
            Task results, in the order the tasks were given

        Raises:
            TaskFailedError: For the first task (in submission order) that raised
        """
        if not tasks:
            return []

        self.logger.debug(
            f"Running {len(tasks)} tasks on {self.executor_cls.__name__} (max_workers={self.max_workers})"
        )
        with self.executor_cls(max_workers=self.max_workers) as executor:
            futures = [executor.submit(task) for task in tasks]
            concurrent.futures.wait(futures)

        results = []
        for index, future in enumerate(futures):
            error = future.exception()
            if error is not None:
                self.logger.error(f"Task {index + 1}/{len(tasks)} failed: {error}")
                raise TaskFailedError(index, len(tasks), error) from error
            results.append(future.result())
        return results
