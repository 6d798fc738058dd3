import hashlib
from typing import Iterator

from sentry_sdk import start_span

from gqlop.context import ExecutionContext
from gqlop.extensions.base_extension import Extension


class SentryTracing(Extension):
    def get_resource_name(self, execution_context: ExecutionContext) -> str:
        query_hash = self._hash_query(execution_context.query_src or "")

        if execution_context.operation_name:
            return f"{execution_context.operation_name}:{query_hash}"

        return query_hash

    def _hash_query(self, query: str) -> str:
        return hashlib.md5(query.encode("utf-8")).hexdigest()

    def on_operation(
        self, execution_context: ExecutionContext
    ) -> Iterator[None]:
        name = execution_context.operation_name or "Anonymous Query"

        with start_span(op="gql", name=name) as span:
            span.set_tag(
                "graphql.resource_name",
                self.get_resource_name(execution_context),
            )
            span.set_data("graphql.query", execution_context.query_src)

            yield

            # operation type is known only after parsing
            span.set_tag(
                "graphql.operation_type",
                execution_context.operation_type_name,
            )

    def on_parse(self, execution_context: ExecutionContext) -> Iterator[None]:
        with start_span(op="parsing", name="Parsing"):
            yield

    def on_execute(
        self, execution_context: ExecutionContext
    ) -> Iterator[None]:
        with start_span(op="execution", name="Execution"):
            yield
