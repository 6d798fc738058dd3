import enum

from typing import Optional

from graphql.language import ast
from graphql.utilities import get_operation_ast


class OperationType(enum.Enum):
    """Enumerates GraphQL operation types"""

    #: query operation
    QUERY = ast.OperationType.QUERY
    #: mutation operation
    MUTATION = ast.OperationType.MUTATION
    #: subscription operation
    SUBSCRIPTION = ast.OperationType.SUBSCRIPTION


def get_operation_type(
    document: ast.DocumentNode, operation_name: Optional[str] = None
) -> Optional[OperationType]:
    """Returns type of the operation selected by ``operation_name``

    :return: ``None`` when operation is missing or can not be selected
             unambiguously
    """
    operation = get_operation_ast(document, operation_name)
    if operation is None:
        return None
    return OperationType(operation.operation)
