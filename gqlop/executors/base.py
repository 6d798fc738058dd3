import abc
from typing import (
    Any,
    Callable,
    List,
    Sequence,
    Union,
)


class BaseExecutor(abc.ABC):
    @abc.abstractmethod
    def submit(self, fn: Callable, *args: Any, **kwargs: Any) -> Any:
        raise NotImplementedError


class BaseSyncExecutor(BaseExecutor):
    @abc.abstractmethod
    def gather(self, futures: Sequence[Any]) -> List[Any]:
        """Waits for all futures, results are in submission order"""
        raise NotImplementedError


class BaseAsyncExecutor(BaseExecutor):
    @abc.abstractmethod
    async def gather(self, futures: Sequence[Any]) -> List[Any]:
        """Waits for all futures, results are in submission order"""
        raise NotImplementedError


SyncAsyncExecutor = Union[BaseSyncExecutor, BaseAsyncExecutor]
