import inspect
from asyncio import (
    Task,
    gather,
    get_running_loop,
)
from typing import Any, Callable, Coroutine, List, Sequence, cast

from gqlop.executors.base import BaseAsyncExecutor


class AsyncIOExecutor(BaseAsyncExecutor):
    """AsyncIOExecutor is an executor that uses asyncio event loop to run tasks.

    By default it allows to run both synchronous and asynchronous functions.
    To deny synchronous functions set deny_sync to True.

    :param deny_sync: deny synchronous functions -
                      raise TypeError if a function result is not awaitable
    """

    def __init__(self, deny_sync: bool = False) -> None:
        self.deny_sync = deny_sync

    async def _wrapper(self, fn: Callable, *args: Any, **kwargs: Any) -> Any:
        result = fn(*args, **kwargs)
        if inspect.isawaitable(result):
            return await result
        else:
            return result

    def submit(self, fn: Callable, *args: Any, **kwargs: Any) -> Task:
        loop = get_running_loop()

        if not inspect.iscoroutinefunction(fn):
            if self.deny_sync:
                raise TypeError("{!r} is not a coroutine function".format(fn))

            return loop.create_task(self._wrapper(fn, *args, **kwargs))

        coro = cast(Coroutine, fn(*args, **kwargs))
        return loop.create_task(coro)

    async def gather(self, futures: Sequence[Task]) -> List[Any]:
        results = await gather(*futures, return_exceptions=True)
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return list(results)
