from concurrent.futures import (
    wait,
    ALL_COMPLETED,
    Executor,
    Future,
)
from typing import (
    Callable,
    Any,
    List,
    Sequence,
)

from gqlop.executors.base import BaseSyncExecutor


class ThreadsExecutor(BaseSyncExecutor):
    """Runs batched operations in a :py:mod:`concurrent.futures` pool

    :param pool: pool to submit operations to, owned by the caller
    """

    def __init__(self, pool: Executor):
        self._pool = pool

    def submit(self, fn: Callable, *args: Any, **kwargs: Any) -> Future:
        return self._pool.submit(fn, *args, **kwargs)

    def gather(self, futures: Sequence[Future]) -> List[Any]:
        wait(futures, return_when=ALL_COMPLETED)
        return [future.result() for future in futures]
