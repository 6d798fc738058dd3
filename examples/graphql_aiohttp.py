import logging

from aiohttp import web
from graphql import build_schema

from gqlop.config import ServerConfig
from gqlop.endpoint.graphql import AsyncGraphQLEndpoint
from gqlop.operator import AsyncOperator


log = logging.getLogger(__name__)


SCHEMA = build_schema("""
    type Query {
      value: String
    }

    type Mutation {
      action(x: Int, y: Int): Boolean
    }
""")


async def value_func(info):
    return 'Hello World!'


async def action_func(info, x=None, y=None):
    log.info('action performed! x=%r y=%r', x, y)
    return True


def root_value(request, document, operation_type):
    return {'value': value_func, 'action': action_func}


async def handle_graphql(request):
    if request.method == 'GET':
        data = dict(request.query)
        read_only = True
    else:
        data = await request.json()
        read_only = False
    result = await request.app['graphql-endpoint'].dispatch(
        data, context={'request': request}, read_only=read_only,
    )
    return web.json_response(result)


def main():
    logging.basicConfig(level=logging.DEBUG)
    app = web.Application()
    app.add_routes([
        web.get('/graphql', handle_graphql),
        web.post('/graphql', handle_graphql),
    ])
    app['graphql-endpoint'] = AsyncGraphQLEndpoint(
        AsyncOperator(ServerConfig(
            schema=SCHEMA,
            root_value=root_value,
            query_batching=True,
        )),
    )
    web.run_app(app, host='0.0.0.0', port=5000)


if __name__ == "__main__":
    main()
