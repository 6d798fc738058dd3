"""
gqlop
~~~~~

Execution orchestration for GraphQL servers built on top of graphql-core.

"""

__version__ = "0.1.0"
