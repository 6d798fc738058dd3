from typing import Any, Dict, List, Mapping, Optional, Union, overload

from gqlop.error import RequestError
from gqlop.operator import AsyncOperator, BaseOperator, Operator
from gqlop.request import OperationRequest
from gqlop.result import GraphQLResponse, OperationResult
from gqlop.validate import print_safe_json


GraphQLRequest = Dict[str, Any]
BatchedRequest = List[GraphQLRequest]
BatchedResponse = List[GraphQLResponse]

SingleOrBatchedRequest = Union[GraphQLRequest, BatchedRequest]
SingleOrBatchedResponse = Union[GraphQLResponse, BatchedResponse]


class BaseGraphQLEndpoint:
    """Turns decoded JSON payloads into operation requests and serializes
    operation results back into JSON-compatible responses
    """

    operator: BaseOperator

    def __init__(self, operator: BaseOperator):
        self.operator = operator

    def _invalid_payload(self, data: Any) -> GraphQLResponse:
        return self.operator.error_result(
            RequestError(
                "GraphQL Server expects JSON object or array, "
                "but got {}".format(print_safe_json(data))
            )
        ).to_dict()

    def _requests(
        self, data: List[Any], read_only: bool
    ) -> List[OperationRequest]:
        # items which are not objects are reported as empty requests
        return [
            OperationRequest.create(item, read_only=read_only)
            if isinstance(item, Mapping)
            else OperationRequest(read_only=read_only)
            for item in data
        ]

    def process_results(
        self, results: List[OperationResult]
    ) -> BatchedResponse:
        return [result.to_dict() for result in results]


class GraphQLEndpoint(BaseGraphQLEndpoint):
    operator: Operator

    def __init__(self, operator: Operator):
        super().__init__(operator)

    @overload
    def dispatch(
        self,
        data: GraphQLRequest,
        context: Optional[Any] = None,
        read_only: bool = False,
    ) -> GraphQLResponse: ...

    @overload
    def dispatch(
        self,
        data: BatchedRequest,
        context: Optional[Any] = None,
        read_only: bool = False,
    ) -> BatchedResponse: ...

    def dispatch(
        self,
        data: SingleOrBatchedRequest,
        context: Optional[Any] = None,
        read_only: bool = False,
    ) -> SingleOrBatchedResponse:
        """Dispatch graphql request to the operator

        Example:

        .. code-block:: python

            result = endpoint.dispatch({"query": "{ hello }"})

        :param data: decoded JSON payload, object or array of objects
        :param context: context for operation
        :param read_only: request came via GET, only queries are allowed
        :return: graphql response or list of responses
        """
        if isinstance(data, list):
            results = self.operator.execute_batch(
                context, self._requests(data, read_only)
            )
            return self.process_results(results)
        if isinstance(data, Mapping):
            request = OperationRequest.create(data, read_only=read_only)
            return self.operator.execute_operation(context, request).to_dict()
        return self._invalid_payload(data)


class AsyncGraphQLEndpoint(BaseGraphQLEndpoint):
    operator: AsyncOperator

    def __init__(self, operator: AsyncOperator):
        super().__init__(operator)

    @overload
    async def dispatch(
        self,
        data: GraphQLRequest,
        context: Optional[Any] = None,
        read_only: bool = False,
    ) -> GraphQLResponse: ...

    @overload
    async def dispatch(
        self,
        data: BatchedRequest,
        context: Optional[Any] = None,
        read_only: bool = False,
    ) -> BatchedResponse: ...

    async def dispatch(
        self,
        data: SingleOrBatchedRequest,
        context: Optional[Any] = None,
        read_only: bool = False,
    ) -> SingleOrBatchedResponse:
        """Dispatch graphql request to the operator

        Example:

        .. code-block:: python

            result = await endpoint.dispatch({"query": "{ hello }"})

        """
        if isinstance(data, list):
            results = await self.operator.execute_batch(
                context, self._requests(data, read_only)
            )
            return self.process_results(results)
        if isinstance(data, Mapping):
            request = OperationRequest.create(data, read_only=read_only)
            result = await self.operator.execute_operation(context, request)
            return result.to_dict()
        return self._invalid_payload(data)
