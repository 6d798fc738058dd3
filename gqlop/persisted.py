from typing import Union

from graphql.language import ast
from graphql.pyutils import inspect

from .config import ServerConfig
from .error import InvariantViolation, RequestError
from .request import OperationRequest


def load_persisted_query(
    config: ServerConfig, request: OperationRequest
) -> Union[str, ast.DocumentNode]:
    """Loads query source or document by ``request.query_id``

    :raises RequestError: persisted queries are not configured
    :raises InvariantViolation: loader returned unexpected value
    """
    loader = config.persisted_query_loader
    if loader is None:
        raise RequestError("Persisted queries are not supported by this server")

    source = loader(request.query_id, request)

    if not isinstance(source, (str, ast.DocumentNode)):
        raise InvariantViolation(
            "Persisted query loader must return query string or instance "
            "of {} but got: {}".format(
                ast.DocumentNode.__name__, inspect(source)
            )
        )

    return source
