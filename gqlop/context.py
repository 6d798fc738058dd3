from dataclasses import dataclass
from typing import Any, List, Optional

from graphql import ExecutionResult
from graphql.language import ast

from gqlop.operation import OperationType
from gqlop.request import OperationRequest


@dataclass
class ExecutionContext:
    """State of a single operation, owned by that operation only"""

    request: OperationRequest
    """Context passed by the caller to ``execute``"""
    context: Any = None
    is_batch: bool = False
    document: Optional[ast.DocumentNode] = None
    operation_type: Optional[OperationType] = None
    root_value: Any = None
    context_value: Any = None
    validation_rules: Optional[List[Any]] = None
    """Set after execution or when operation was rejected early"""
    result: Optional[ExecutionResult] = None

    @property
    def operation_name(self) -> Optional[str]:
        name = self.request.operation_name
        return name if isinstance(name, str) else None

    @property
    def operation_type_name(self) -> str:
        if self.operation_type is None:
            return "unknown"
        return self.operation_type.value.value

    @property
    def query_src(self) -> Optional[str]:
        query = self.request.query
        return query if isinstance(query, str) else None
