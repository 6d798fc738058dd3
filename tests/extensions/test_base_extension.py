from typing import Iterator

import pytest

from gqlop.config import ServerConfig
from gqlop.context import ExecutionContext
from gqlop.extensions.base_extension import Extension
from gqlop.operation import OperationType
from gqlop.operator import AsyncOperator, Operator
from gqlop.request import OperationRequest

from tests.base import make_root, make_schema


class Recorder(Extension):
    def __init__(self) -> None:
        self.events = []

    def on_operation(
        self, execution_context: ExecutionContext
    ) -> Iterator[None]:
        self.events.append("operation:start")
        yield
        self.events.append("operation:end")

    def on_parse(self, execution_context: ExecutionContext) -> Iterator[None]:
        assert execution_context.document is None
        self.events.append("parse:start")
        yield
        assert execution_context.document is not None
        self.events.append(
            "parse:end:{}".format(execution_context.operation_type_name)
        )

    def on_execute(
        self, execution_context: ExecutionContext
    ) -> Iterator[None]:
        assert execution_context.root_value is not None
        self.events.append("execute:start")
        yield
        assert execution_context.result is not None
        self.events.append("execute:end")


def make_operator(extension, cls=Operator):
    return cls(
        ServerConfig(
            schema=make_schema(),
            root_value=make_root(),
            extensions=[extension],
        )
    )


def test_hooks_order():
    recorder = Recorder()
    result = make_operator(recorder).execute_operation(
        None, OperationRequest(query="{ hello }")
    )
    assert result.data == {"hello": "Hello, world"}
    assert recorder.events == [
        "operation:start",
        "parse:start",
        "parse:end:query",
        "execute:start",
        "execute:end",
        "operation:end",
    ]


def test_invalid_request_skips_stages():
    recorder = Recorder()
    make_operator(recorder).execute_operation(None, OperationRequest())
    assert recorder.events == ["operation:start", "operation:end"]


def test_rejected_operation_skips_execution():
    recorder = Recorder()
    make_operator(recorder).execute_operation(
        None, OperationRequest(query="mutation { increment }", read_only=True)
    )
    assert recorder.events == [
        "operation:start",
        "parse:start",
        "parse:end:mutation",
        "operation:end",
    ]


@pytest.mark.asyncio
async def test_async_hooks_order():
    recorder = Recorder()
    operator = make_operator(recorder, cls=AsyncOperator)
    await operator.execute_operation(
        None, OperationRequest(query='{ slow(delay: 0, value: "x") }')
    )
    assert recorder.events[0] == "operation:start"
    assert recorder.events[-1] == "operation:end"
    assert "execute:end" in recorder.events


def test_extension_class_and_plain_function_hook():
    seen = []

    class TypeSpy(Extension):
        def on_execute(self, execution_context):
            seen.append(execution_context.operation_type)

    operator = make_operator(TypeSpy)
    operator.execute_operation(None, OperationRequest(query="{ hello }"))
    assert seen == [OperationType.QUERY]
