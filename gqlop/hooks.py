"""
gqlop.hooks
~~~~~~~~~~~

Root value, context and validation rules can be configured either as
a static value or as a function of the request::

    def root_value(request, document, operation_type):
        return {"viewer": current_user()}

"""

from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Generic,
    List,
    Optional,
    TypeVar,
    Union,
)

from graphql.language import ast
from graphql.pyutils import inspect

from .error import InvariantViolation
from .operation import OperationType
from .request import OperationRequest

if TYPE_CHECKING:
    from .config import ServerConfig


T = TypeVar("T")


@dataclass(frozen=True)
class Static(Generic[T]):
    value: T

    def resolve(
        self,
        request: OperationRequest,
        document: ast.DocumentNode,
        operation_type: OperationType,
    ) -> T:
        return self.value


@dataclass(frozen=True)
class Computed(Generic[T]):
    func: Callable[[OperationRequest, ast.DocumentNode, OperationType], T]

    def resolve(
        self,
        request: OperationRequest,
        document: ast.DocumentNode,
        operation_type: OperationType,
    ) -> T:
        return self.func(request, document, operation_type)


Hook = Union[Static[T], Computed[T]]


def as_hook(value: Any) -> Hook:
    """Wraps configured value into a hook

    Callables become :py:class:`Computed`, anything else is :py:class:`Static`.
    Wrap callable value explicitly into :py:class:`Static` to use it as is.
    """
    if isinstance(value, (Static, Computed)):
        return value
    if callable(value):
        return Computed(value)
    return Static(value)


def resolve_root_value(
    config: "ServerConfig",
    request: OperationRequest,
    document: ast.DocumentNode,
    operation_type: OperationType,
) -> Any:
    return config.root_value.resolve(request, document, operation_type)


def resolve_context_value(
    config: "ServerConfig",
    context: Any,
    request: OperationRequest,
    document: ast.DocumentNode,
    operation_type: OperationType,
) -> Any:
    """Configured context wins over the context passed by the caller"""
    hook = config.context if config.context is not None else as_hook(context)
    return hook.resolve(request, document, operation_type)


def resolve_validation_rules(
    config: "ServerConfig",
    request: OperationRequest,
    document: ast.DocumentNode,
    operation_type: OperationType,
) -> Optional[List[Any]]:
    rules = config.validation_rules.resolve(request, document, operation_type)

    if rules is not None and not isinstance(rules, (list, tuple)):
        raise InvariantViolation(
            "Expecting validation rules to be list or callable returning "
            "list, but got: {}".format(inspect(rules))
        )

    return None if rules is None else list(rules)
