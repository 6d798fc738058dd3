from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple, TypedDict

from graphql import ExecutionResult, GraphQLError

from .config import DebugFlag, ErrorFormatter, ErrorsHandler, ServerConfig
from .formatting import (
    default_errors_handler,
    is_client_safe,
    prepare_formatter,
)


class GraphQLResponse(TypedDict, total=False):
    data: Optional[Dict[str, Any]]
    errors: List[Dict[str, Any]]
    extensions: Dict[str, Any]


@dataclass(frozen=True)
class PresentationPolicy:
    """Formatter and handler applied to errors at serialization time"""

    error_formatter: ErrorFormatter
    errors_handler: ErrorsHandler = default_errors_handler
    debug: DebugFlag = DebugFlag.NONE

    @classmethod
    def from_config(cls, config: ServerConfig) -> "PresentationPolicy":
        return cls(
            error_formatter=prepare_formatter(
                config.error_formatter, config.debug
            ),
            errors_handler=config.errors_handler or default_errors_handler,
            debug=config.debug,
        )

    def _rethrow(self, errors: Sequence[GraphQLError]) -> None:
        for error in errors:
            original = error.original_error
            if original is None or isinstance(original, GraphQLError):
                continue
            if self.debug & DebugFlag.RETHROW_INTERNAL_EXCEPTIONS:
                raise original
            if (
                self.debug & DebugFlag.RETHROW_UNSAFE_EXCEPTIONS
                and not is_client_safe(error)
            ):
                raise original

    def format_errors(
        self, errors: Sequence[GraphQLError]
    ) -> List[Dict[str, Any]]:
        self._rethrow(errors)
        return self.errors_handler(list(errors), self.error_formatter)


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a single operation together with its presentation policy"""

    data: Optional[Dict[str, Any]]
    errors: Tuple[GraphQLError, ...]
    policy: PresentationPolicy
    extensions: Optional[Dict[str, Any]] = field(default=None)

    @classmethod
    def from_execution_result(
        cls, result: ExecutionResult, policy: PresentationPolicy
    ) -> "OperationResult":
        return cls(
            data=result.data,
            errors=tuple(result.errors or ()),
            policy=policy,
            extensions=result.extensions,
        )

    def to_dict(self) -> GraphQLResponse:
        response: GraphQLResponse = {"data": self.data}

        if self.errors:
            response["errors"] = self.policy.format_errors(self.errors)

        if self.extensions:
            response["extensions"] = self.extensions

        return response

    @property
    def formatted(self) -> GraphQLResponse:
        return self.to_dict()
