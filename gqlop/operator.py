"""
gqlop.operator
~~~~~~~~~~~~~~

Runs operation requests against the configured schema.

Each request goes through the same steps: shape validation, document
resolution, operation type check, hooks resolution and, finally, the
execution engine call. Client errors found on the way are returned as
results, server misconfiguration is raised.

"""

import inspect
import logging
from typing import Any, List, Optional, Sequence, Union, overload

from graphql import ExecutionResult, GraphQLError, located_error, parse
from graphql.language import ast

from .config import ServerConfig
from .context import ExecutionContext
from .engine import AwaitableOrValue, Engine, GraphQLCoreEngine
from .error import InvariantViolation, RequestError
from .executors.asyncio import AsyncIOExecutor
from .executors.base import BaseAsyncExecutor, BaseSyncExecutor
from .executors.sync import SyncExecutor
from .extensions.base_extension import ExtensionsManager
from .hooks import (
    resolve_context_value,
    resolve_root_value,
    resolve_validation_rules,
)
from .operation import OperationType, get_operation_type
from .persisted import load_persisted_query
from .request import OperationRequest
from .result import OperationResult, PresentationPolicy
from .validate import validate_request


logger = logging.getLogger(__name__)


def _request_error_result(error: RequestError) -> ExecutionResult:
    return ExecutionResult(data=None, errors=[located_error(error)])


def _discard(awaitable: Any) -> None:
    """Closes engine result which will never be awaited

    Only the outermost coroutine is reachable here: graphql-core creates
    nested coroutines for async fields before returning, Python reports
    them with "coroutine ... was never awaited" warning when they are
    garbage collected.
    """
    close = getattr(awaitable, "close", None)
    if close is not None:
        close()


class BaseOperator:
    config: ServerConfig
    engine: Engine
    policy: PresentationPolicy

    def __init__(
        self,
        config: ServerConfig,
        executor: Union[BaseSyncExecutor, BaseAsyncExecutor],
        engine: Optional[Engine] = None,
    ):
        self.config = config
        self.executor = executor
        self.engine = engine or GraphQLCoreEngine()
        self.policy = PresentationPolicy.from_config(config)

    def error_result(self, error: RequestError) -> OperationResult:
        """Result for a request which was rejected before reaching operator"""
        return self._present(_request_error_result(error))

    def _present(self, result: ExecutionResult) -> OperationResult:
        return OperationResult.from_execution_result(result, self.policy)

    def _prepare(
        self,
        execution_context: ExecutionContext,
        extensions_manager: ExtensionsManager,
    ) -> None:
        """Runs every step before the engine call

        ``execution_context.result`` is set when request shape is invalid.
        """
        config = self.config
        request = execution_context.request

        if config.schema is None:
            raise InvariantViolation("Schema is required for the server")

        if execution_context.is_batch and not config.query_batching:
            raise RequestError(
                "Batched queries are not supported by this server"
            )

        errors = validate_request(request)
        if errors:
            execution_context.result = ExecutionResult(
                data=None, errors=[located_error(e) for e in errors]
            )
            return

        with extensions_manager.parsing():
            if request.is_persisted:
                document = load_persisted_query(config, request)
            else:
                document = request.query

            if not isinstance(document, ast.DocumentNode):
                document = parse(document)

            execution_context.document = document
            operation_type = get_operation_type(
                document, request.operation_name
            )
            execution_context.operation_type = operation_type

        if operation_type is None:
            raise RequestError("Failed to determine operation type")

        logger.debug(
            "Resolved %s operation %r",
            operation_type.value.value,
            request.operation_name,
        )

        if operation_type is not OperationType.QUERY and request.read_only:
            raise RequestError("GET supports only query operation")

        if operation_type is OperationType.SUBSCRIPTION:
            raise RequestError("Subscription operations are not supported")

        execution_context.root_value = resolve_root_value(
            config, request, document, operation_type
        )
        execution_context.context_value = resolve_context_value(
            config, execution_context.context, request, document, operation_type
        )
        execution_context.validation_rules = resolve_validation_rules(
            config, request, document, operation_type
        )

    def _call_engine(
        self, execution_context: ExecutionContext
    ) -> AwaitableOrValue:
        assert execution_context.document is not None
        return self.engine.execute(
            schema=self.config.schema,  # type: ignore[arg-type]
            document=execution_context.document,
            root_value=execution_context.root_value,
            context_value=execution_context.context_value,
            variables=execution_context.request.variables,
            operation_name=execution_context.request.operation_name,
            field_resolver=self.config.field_resolver,
            validation_rules=execution_context.validation_rules,
        )


class Operator(BaseOperator):
    """Synchronous operator

    Batched requests are submitted to the ``executor``: by default they run
    one after another, pass :py:class:`gqlop.executors.threads.ThreadsExecutor`
    to run them in a thread pool.

    Example:

    .. code-block:: python

        operator = Operator(ServerConfig(schema=schema))
        result = operator.execute_operation(
            None, OperationRequest(query="{ hello }")
        )
        result.to_dict()

    """

    executor: BaseSyncExecutor

    def __init__(
        self,
        config: ServerConfig,
        executor: Optional[BaseSyncExecutor] = None,
        engine: Optional[Engine] = None,
    ):
        super().__init__(config, executor or SyncExecutor(), engine)

    @overload
    def execute(
        self, context: Any, operations: OperationRequest
    ) -> OperationResult: ...

    @overload
    def execute(
        self, context: Any, operations: Sequence[OperationRequest]
    ) -> List[OperationResult]: ...

    def execute(
        self,
        context: Any,
        operations: Union[OperationRequest, Sequence[OperationRequest]],
    ) -> Union[OperationResult, List[OperationResult]]:
        if isinstance(operations, OperationRequest):
            return self.execute_operation(context, operations)
        return self.execute_batch(context, operations)

    def execute_operation(
        self, context: Any, request: OperationRequest
    ) -> OperationResult:
        return self._execute_operation(context, request, False)

    def execute_batch(
        self, context: Any, requests: Sequence[OperationRequest]
    ) -> List[OperationResult]:
        logger.debug("Dispatching batch of %d operations", len(requests))
        futures = [
            self.executor.submit(
                self._execute_operation, context, request, True
            )
            for request in requests
        ]
        return self.executor.gather(futures)

    def _execute_operation(
        self, context: Any, request: OperationRequest, is_batch: bool
    ) -> OperationResult:
        execution_context = ExecutionContext(
            request=request, context=context, is_batch=is_batch
        )
        extensions_manager = ExtensionsManager(
            execution_context, self.config.extensions
        )

        with extensions_manager.operation():
            try:
                self._prepare(execution_context, extensions_manager)

                if execution_context.result is None:
                    with extensions_manager.execution():
                        result = self._call_engine(execution_context)
                        if inspect.isawaitable(result):
                            _discard(result)
                            raise InvariantViolation(
                                "Execution engine did not complete "
                                "synchronously, use AsyncOperator"
                            )
                        execution_context.result = result
            except RequestError as e:
                logger.debug("Request rejected: %s", e.message)
                execution_context.result = _request_error_result(e)
            except GraphQLError as e:
                execution_context.result = ExecutionResult(
                    data=None, errors=[e]
                )
            except InvariantViolation:
                logger.exception("Server is misconfigured")
                raise

        return self._present(execution_context.result)


class AsyncOperator(BaseOperator):
    """Asynchronous operator, batched requests run as concurrent tasks

    Example:

    .. code-block:: python

        operator = AsyncOperator(ServerConfig(schema=schema))
        result = await operator.execute_operation(
            None, OperationRequest(query="{ hello }")
        )

    """

    executor: BaseAsyncExecutor

    def __init__(
        self,
        config: ServerConfig,
        executor: Optional[BaseAsyncExecutor] = None,
        engine: Optional[Engine] = None,
    ):
        super().__init__(config, executor or AsyncIOExecutor(), engine)

    @overload
    async def execute(
        self, context: Any, operations: OperationRequest
    ) -> OperationResult: ...

    @overload
    async def execute(
        self, context: Any, operations: Sequence[OperationRequest]
    ) -> List[OperationResult]: ...

    async def execute(
        self,
        context: Any,
        operations: Union[OperationRequest, Sequence[OperationRequest]],
    ) -> Union[OperationResult, List[OperationResult]]:
        if isinstance(operations, OperationRequest):
            return await self.execute_operation(context, operations)
        return await self.execute_batch(context, operations)

    async def execute_operation(
        self, context: Any, request: OperationRequest
    ) -> OperationResult:
        return await self._execute_operation(context, request, False)

    async def execute_batch(
        self, context: Any, requests: Sequence[OperationRequest]
    ) -> List[OperationResult]:
        logger.debug("Dispatching batch of %d operations", len(requests))
        tasks = [
            self.executor.submit(
                self._execute_operation, context, request, True
            )
            for request in requests
        ]
        return await self.executor.gather(tasks)

    async def _execute_operation(
        self, context: Any, request: OperationRequest, is_batch: bool
    ) -> OperationResult:
        execution_context = ExecutionContext(
            request=request, context=context, is_batch=is_batch
        )
        extensions_manager = ExtensionsManager(
            execution_context, self.config.extensions
        )

        with extensions_manager.operation():
            try:
                self._prepare(execution_context, extensions_manager)

                if execution_context.result is None:
                    with extensions_manager.execution():
                        result = self._call_engine(execution_context)
                        if inspect.isawaitable(result):
                            result = await result
                        execution_context.result = result
            except RequestError as e:
                logger.debug("Request rejected: %s", e.message)
                execution_context.result = _request_error_result(e)
            except GraphQLError as e:
                execution_context.result = ExecutionResult(
                    data=None, errors=[e]
                )
            except InvariantViolation:
                logger.exception("Server is misconfigured")
                raise

        return self._present(execution_context.result)
