from typing import (
    Generic,
    List,
    Optional,
    Sequence,
    TypeVar,
    Callable,
    Any,
)

from gqlop.executors.base import BaseSyncExecutor


T = TypeVar("T")


class FutureLike(Generic[T]):
    def __init__(
        self,
        result: Optional[T] = None,
        exception: Optional[BaseException] = None,
    ) -> None:
        self._result = result
        self._exception = exception

    def result(self) -> T:
        if self._exception is not None:
            raise self._exception
        return self._result  # type: ignore[return-value]


class SyncExecutor(BaseSyncExecutor):
    """Runs submitted functions immediately, one after another"""

    def submit(self, fn: Callable, *args: Any, **kwargs: Any) -> FutureLike:
        try:
            return FutureLike(fn(*args, **kwargs))
        except Exception as e:
            return FutureLike(exception=e)

    def gather(self, futures: Sequence[FutureLike]) -> List[Any]:
        return [future.result() for future in futures]
