import enum
from dataclasses import dataclass, field, fields
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Dict,
    List,
    Mapping,
    Optional,
    Sequence,
    Type,
    Union,
)

from graphql import GraphQLError, GraphQLSchema
from graphql.language import ast
from graphql.pyutils import inspect

from .error import InvariantViolation
from .hooks import Hook, as_hook
from .request import OperationRequest

if TYPE_CHECKING:
    from .extensions.base_extension import Extension


class DebugFlag(enum.IntFlag):
    """Controls how much internal detail ends up in formatted errors"""

    NONE = 0
    #: add real message of internal errors into ``extensions.debugMessage``
    INCLUDE_DEBUG_MESSAGE = 1
    #: add traceback of the original error into ``extensions.trace``
    INCLUDE_TRACE = 2
    #: re-raise any original error while serializing the result
    RETHROW_INTERNAL_EXCEPTIONS = 4
    #: re-raise original errors which are not safe to show to a client
    RETHROW_UNSAFE_EXCEPTIONS = 8


PersistedQueryLoader = Callable[
    [str, OperationRequest], Union[str, ast.DocumentNode]
]
ErrorFormatter = Callable[[GraphQLError], Dict[str, Any]]
ErrorsHandler = Callable[
    [List[GraphQLError], ErrorFormatter], List[Dict[str, Any]]
]


def _check_callable(name: str, value: Any) -> None:
    if value is not None and not callable(value):
        raise InvariantViolation(
            "{} must be callable, but got: {}".format(name, inspect(value))
        )


@dataclass(frozen=True)
class ServerConfig:
    """Server-wide settings, shared between all requests

    ``root_value``, ``context`` and ``validation_rules`` accept either a
    value or a function ``(request, document, operation_type) -> value``,
    see :py:mod:`gqlop.hooks`.
    """

    schema: Optional[GraphQLSchema] = None
    root_value: Hook = None  # type: ignore[assignment]
    context: Optional[Hook] = None
    validation_rules: Hook = None  # type: ignore[assignment]
    field_resolver: Optional[Callable] = None
    persisted_query_loader: Optional[PersistedQueryLoader] = None
    error_formatter: Optional[ErrorFormatter] = None
    errors_handler: Optional[ErrorsHandler] = None
    debug: DebugFlag = DebugFlag.NONE
    query_batching: bool = False
    extensions: Sequence[Union["Extension", Type["Extension"]]] = field(
        default_factory=tuple
    )

    def __post_init__(self) -> None:
        _check_callable("field_resolver", self.field_resolver)
        _check_callable("persisted_query_loader", self.persisted_query_loader)
        _check_callable("error_formatter", self.error_formatter)
        _check_callable("errors_handler", self.errors_handler)

        if not isinstance(self.debug, int):
            raise InvariantViolation(
                "debug must be int or DebugFlag, but got: {}".format(
                    inspect(self.debug)
                )
            )
        if not isinstance(self.query_batching, bool):
            raise InvariantViolation(
                "query_batching must be bool, but got: {}".format(
                    inspect(self.query_batching)
                )
            )

        # frozen dataclass, normalize hooks in place once
        object.__setattr__(self, "debug", DebugFlag(self.debug))
        object.__setattr__(self, "root_value", as_hook(self.root_value))
        object.__setattr__(
            self, "validation_rules", as_hook(self.validation_rules)
        )
        if self.context is not None:
            object.__setattr__(self, "context", as_hook(self.context))
        object.__setattr__(self, "extensions", tuple(self.extensions))

    @classmethod
    def create(cls, options: Mapping[str, Any]) -> "ServerConfig":
        """Creates config from a mapping of options

        .. code-block:: python

            config = ServerConfig.create({
                "schema": schema,
                "query_batching": True,
            })

        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise InvariantViolation(
                "Unknown server config options: {}".format(", ".join(unknown))
            )
        return cls(**options)
