import asyncio

import pytest

from gqlop.config import ServerConfig
from gqlop.error import InvariantViolation
from gqlop.executors.asyncio import AsyncIOExecutor
from gqlop.operator import AsyncOperator
from gqlop.request import OperationRequest

from tests.base import make_root, make_schema, messages


SLOW_QUERY = (
    "query Slow($d: Float!, $v: String!) { slow(delay: $d, value: $v) }"
)


def slow(delay, value):
    return OperationRequest(
        query=SLOW_QUERY, variables={"d": delay, "v": value}
    )


@pytest.fixture(name="operator")
def operator_fixture():
    return AsyncOperator(
        ServerConfig(
            schema=make_schema(), root_value=make_root(), query_batching=True
        )
    )


@pytest.mark.asyncio
async def test_query(operator):
    result = await operator.execute_operation(
        None, OperationRequest(query="{ hello }")
    )
    assert result.to_dict() == {"data": {"hello": "Hello, world"}}


@pytest.mark.asyncio
async def test_async_resolver(operator):
    result = await operator.execute_operation(None, slow(0, "done"))
    assert result.data == {"slow": "done"}


@pytest.mark.asyncio
async def test_batch_preserves_order(operator):
    results = await operator.execute_batch(
        None,
        [
            slow(0.05, "first"),
            slow(0, "second"),
            slow(0.02, "third"),
        ],
    )
    assert [r.data for r in results] == [
        {"slow": "first"},
        {"slow": "second"},
        {"slow": "third"},
    ]


@pytest.mark.asyncio
async def test_batch_runs_concurrently(operator):
    loop = asyncio.get_running_loop()
    start = loop.time()
    results = await operator.execute_batch(
        None, [slow(0.2, str(i)) for i in range(5)]
    )
    assert loop.time() - start < 0.9
    assert [r.data["slow"] for r in results] == ["0", "1", "2", "3", "4"]


@pytest.mark.asyncio
async def test_batch_failure_is_isolated(operator):
    results = await operator.execute_batch(
        None,
        [
            slow(0.02, "first"),
            OperationRequest(query="query A { hello }", operation_name="B"),
            slow(0, "third"),
        ],
    )
    assert results[0].data == {"slow": "first"}
    assert results[1].data is None
    assert messages(results[1]) == ["Failed to determine operation type"]
    assert results[2].data == {"slow": "third"}


@pytest.mark.asyncio
async def test_batching_disabled():
    operator = AsyncOperator(
        ServerConfig(schema=make_schema(), root_value=make_root())
    )
    results = await operator.execute_batch(
        None, [OperationRequest(query="{ hello }")] * 2
    )
    assert [messages(r) for r in results] == [
        ["Batched queries are not supported by this server"]
    ] * 2


@pytest.mark.asyncio
async def test_empty_batch(operator):
    assert await operator.execute_batch(None, []) == []


@pytest.mark.asyncio
async def test_resolver_error(operator):
    result = await operator.execute_operation(
        None, OperationRequest(query="{ broken }")
    )
    assert result.data == {"broken": None}
    assert result.to_dict()["errors"] == [
        {
            "message": "Internal server error",
            "locations": [{"line": 1, "column": 3}],
            "path": ["broken"],
        }
    ]


@pytest.mark.asyncio
async def test_fatal_error_in_batch():
    operator = AsyncOperator(
        ServerConfig(
            schema=make_schema(),
            root_value=make_root(),
            query_batching=True,
            persisted_query_loader=lambda query_id, request: object(),
        )
    )
    with pytest.raises(InvariantViolation):
        await operator.execute_batch(
            None, [slow(0, "a"), OperationRequest(query_id="x")]
        )


@pytest.mark.asyncio
async def test_fatal_error_in_batch_waits_for_siblings():
    done = []

    async def resolve_slow(info, delay, value):
        await asyncio.sleep(delay)
        done.append(value)
        return value

    operator = AsyncOperator(
        ServerConfig(
            schema=make_schema(),
            root_value=dict(make_root(), slow=resolve_slow),
            query_batching=True,
            persisted_query_loader=lambda query_id, request: object(),
        )
    )
    with pytest.raises(InvariantViolation):
        await operator.execute_batch(
            None, [slow(0.1, "a"), OperationRequest(query_id="x")]
        )
    assert done == ["a"]


@pytest.mark.asyncio
async def test_execute_dispatch(operator):
    single = await operator.execute(None, OperationRequest(query="{ hello }"))
    assert single.data == {"hello": "Hello, world"}

    batch = await operator.execute(None, [slow(0, "a"), slow(0, "b")])
    assert [r.data for r in batch] == [{"slow": "a"}, {"slow": "b"}]


@pytest.mark.asyncio
async def test_deny_sync_executor():
    executor = AsyncIOExecutor(deny_sync=True)
    operator = AsyncOperator(
        ServerConfig(
            schema=make_schema(), root_value=make_root(), query_batching=True
        ),
        executor=executor,
    )
    results = await operator.execute_batch(None, [slow(0, "a")])
    assert results[0].data == {"slow": "a"}

    with pytest.raises(TypeError):
        executor.submit(lambda: None)
