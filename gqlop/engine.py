import abc
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    Optional,
    Sequence,
    Type,
    Union,
)

from graphql import (
    ExecutionContext,
    ExecutionResult,
    GraphQLSchema,
    Middleware,
    execute,
    validate,
)
from graphql.language import ast


AwaitableOrValue = Union[Awaitable[ExecutionResult], ExecutionResult]


class Engine(abc.ABC):
    """Boundary to the component which actually resolves fields"""

    @abc.abstractmethod
    def execute(
        self,
        *,
        schema: GraphQLSchema,
        document: ast.DocumentNode,
        root_value: Any,
        context_value: Any,
        variables: Optional[Dict[str, Any]],
        operation_name: Optional[str],
        field_resolver: Optional[Callable],
        validation_rules: Optional[Sequence[Any]],
    ) -> AwaitableOrValue:
        raise NotImplementedError


class GraphQLCoreEngine(Engine):
    """Validates and executes documents using graphql-core

    ``validation_rules=None`` means graphql-core's specified rules,
    empty list disables validation.
    """

    def __init__(
        self,
        middleware: Optional[Middleware] = None,
        execution_context_class: Optional[Type[ExecutionContext]] = None,
    ) -> None:
        self.middleware = middleware
        self.execution_context_class = execution_context_class

    def execute(
        self,
        *,
        schema: GraphQLSchema,
        document: ast.DocumentNode,
        root_value: Any,
        context_value: Any,
        variables: Optional[Dict[str, Any]],
        operation_name: Optional[str],
        field_resolver: Optional[Callable],
        validation_rules: Optional[Sequence[Any]],
    ) -> AwaitableOrValue:
        errors = validate(schema, document, validation_rules)
        if errors:
            return ExecutionResult(data=None, errors=errors)

        return execute(
            schema,
            document,
            root_value=root_value,
            context_value=context_value,
            variable_values=variables,
            operation_name=operation_name,
            field_resolver=field_resolver,
            middleware=self.middleware,
            execution_context_class=self.execution_context_class,
        )
