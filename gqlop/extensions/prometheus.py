import time
from typing import Iterator, Optional

from prometheus_client import Summary
from prometheus_client.metrics import MetricWrapperBase

from gqlop.context import ExecutionContext
from gqlop.extensions.base_extension import Extension


_METRIC = None


def _get_default_metric() -> Summary:
    global _METRIC
    if _METRIC is None:
        _METRIC = Summary(
            "graphql_operation_time",
            "GraphQL operation time (seconds)",
            ["server", "operation_type", "operation_name"],
        )
    return _METRIC


class PrometheusMetrics(Extension):
    """Observes duration of every operation

    :param name: value of the ``server`` label
    :param metric: metric with ``server``, ``operation_type`` and
                   ``operation_name`` labels, ``graphql_operation_time``
                   summary by default
    """

    def __init__(
        self,
        name: str,
        *,
        metric: Optional[MetricWrapperBase] = None,
    ):
        self._name = name
        self._metric = metric or _get_default_metric()

    def on_operation(
        self, execution_context: ExecutionContext
    ) -> Iterator[None]:
        start_time = time.perf_counter()
        yield
        self._metric.labels(
            self._name,
            execution_context.operation_type_name,
            execution_context.operation_name or "",
        ).observe(time.perf_counter() - start_time)
