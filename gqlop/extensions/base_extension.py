from __future__ import annotations

import contextlib
import inspect
from types import TracebackType
from typing import (
    TYPE_CHECKING,
    Callable,
    Iterator,
    List,
    NamedTuple,
    Optional,
    Sequence,
    Type,
    Union,
)

if TYPE_CHECKING:
    from gqlop.context import ExecutionContext


Hook = Callable[["Extension", "ExecutionContext"], Iterator[None]]


class Extension:
    """Extension class for hooking into the operation lifecycle.

    Each hook is called before and after its respective stage, providing
    opportunities for logging, monitoring and tracing.

    **Extension Lifecycle Diagram:**

    ```
    ┌─────────────────────────────────────────────────────────────┐
    │ on_operation() - Wraps entire operation lifecycle           │
    │ ┌─────────────────────────────────────────────────────────┐ │
    │ │ on_parse() - Document resolution                        │ │
    │ │ • Load persisted query, parse GraphQL string to AST     │ │
    │ │ • Determine operation type                              │ │
    │ └─────────────────────────────────────────────────────────┘ │
    │ ┌─────────────────────────────────────────────────────────┐ │
    │ │ on_execute() - Engine call                              │ │
    │ │ • Validate document and resolve fields                  │ │
    │ │ • Set execution_context.result                          │ │
    │ └─────────────────────────────────────────────────────────┘ │
    └─────────────────────────────────────────────────────────────┘
    ```

    ``on_parse`` and ``on_execute`` are skipped when the request was rejected
    before reaching that stage.

    **ExecutionContext fields availability:**
    - on_operation:
        before yield: request, context, is_batch
        after yield: all fields from execution_context
    - on_parse:
        after yield: document, operation_type
    - on_execute:
        before yield: root_value, context_value, validation_rules
        after yield: result

    Each hook should be implemented as a generator function that yields once.
    Keep per-operation state in generator locals: one extension instance
    serves all concurrent operations.
    """

    def on_operation(  # type: ignore[return]
        self, execution_context: ExecutionContext
    ) -> Iterator[None]:
        """Called before and after the whole operation."""
        yield None

    def on_parse(  # type: ignore[return]
        self, execution_context: ExecutionContext
    ) -> Iterator[None]:
        """Called before and after the document is loaded and parsed."""
        yield None

    def on_execute(  # type: ignore[return]
        self, execution_context: ExecutionContext
    ) -> Iterator[None]:
        """Called before and after the execution engine call."""
        yield None


class ExtensionsManager:
    """ExtensionManager is a per-operation extensions manager.

    It is used to call extensions hooks in the right order.
    """

    def __init__(
        self,
        execution_context: ExecutionContext,
        extensions: Sequence[Union[Type[Extension], Extension]],
    ):
        self.execution_context = execution_context

        init_extensions: List[Extension] = []

        for extension in extensions:
            if isinstance(extension, Extension):
                init_extensions.append(extension)
            else:
                init_extensions.append(extension())

        self.extensions = init_extensions

    def operation(self) -> "ExtensionContextManager":
        return ExtensionContextManager(
            Extension.on_operation.__name__,
            self.extensions,
            self.execution_context,
        )

    def parsing(self) -> "ExtensionContextManager":
        return ExtensionContextManager(
            Extension.on_parse.__name__, self.extensions, self.execution_context
        )

    def execution(self) -> "ExtensionContextManager":
        return ExtensionContextManager(
            Extension.on_execute.__name__,
            self.extensions,
            self.execution_context,
        )


class WrappedHook(NamedTuple):
    extension: Extension
    initialized_hook: Iterator[None]


class ExtensionContextManager:
    __slots__ = ("hook_name", "hooks", "default_hook")

    def __init__(
        self,
        hook_name: str,
        extensions: List[Extension],
        execution_context: ExecutionContext,
    ):
        self.hook_name = hook_name
        self.hooks: List[WrappedHook] = []
        self.default_hook: Hook = getattr(Extension, self.hook_name)
        for extension in extensions:
            hook = self.get_hook(extension, execution_context)
            if hook:
                self.hooks.append(hook)

    def get_hook(
        self, extension: Extension, execution_context: ExecutionContext
    ) -> Optional[WrappedHook]:
        hook_fn: Optional[Hook] = getattr(type(extension), self.hook_name)
        hook_fn = hook_fn if hook_fn is not self.default_hook else None

        if hook_fn is None:
            return None

        if inspect.isgeneratorfunction(hook_fn):
            return WrappedHook(extension, hook_fn(extension, execution_context))

        if callable(hook_fn):
            return self.from_callable(extension, hook_fn, execution_context)

        raise ValueError(
            f"Hook {self.hook_name} on {extension} "
            f"must be callable, received {hook_fn!r}"
        )

    @staticmethod
    def from_callable(
        extension: Extension,
        func: Hook,
        execution_context: ExecutionContext,
    ) -> WrappedHook:
        def iterator() -> Iterator[None]:
            func(extension, execution_context)
            yield

        return WrappedHook(extension, iterator())

    def run_hooks(self, is_exit: bool = False) -> None:
        ctx = (
            contextlib.suppress(StopIteration)
            if is_exit
            else contextlib.nullcontext()
        )
        for hook in self.hooks:
            with ctx:
                next(hook.initialized_hook)

    def __enter__(self) -> None:
        self.run_hooks()

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.run_hooks(is_exit=True)
