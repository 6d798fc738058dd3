import asyncio

from graphql import ExecutionResult, build_schema

from gqlop.engine import Engine


SDL = """
type Query {
  hello(name: String): String
  slow(delay: Float!, value: String!): String
  broken: String
}

type Mutation {
  increment: Int
}

type Subscription {
  ticks: Int
}
"""


def make_schema():
    return build_schema(SDL)


async def _slow(info, delay, value):
    await asyncio.sleep(delay)
    return value


def _broken(info):
    raise ValueError("secret database error")


def make_root():
    return {
        "hello": lambda info, name=None: "Hello, {}".format(name or "world"),
        "slow": _slow,
        "broken": _broken,
        "increment": lambda info: 1,
    }


class RecordingEngine(Engine):
    def __init__(self, data=None):
        self.data = data if data is not None else {"ok": True}
        self.calls = []

    def execute(self, **kwargs):
        self.calls.append(kwargs)
        return ExecutionResult(data=self.data, errors=None)


def messages(result):
    return [e.message for e in result.errors]
