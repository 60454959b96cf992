"""
Types passed around during execution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

from graphql import DocumentNode, ExecutionResult, GraphQLSchema


# execute(schema, document, root_value, context, variables, operation_name)
ExecuteFn = Callable[
    [GraphQLSchema, DocumentNode, Any, Any, Optional[Mapping[str, Any]], Optional[str]],
    Union[ExecutionResult, Awaitable[ExecutionResult]],
]


@dataclass(frozen=True)
class ExtensionContext:
    """
    What the extensions hook sees once execution has settled.

    ``result`` is the final result object, the one that is returned to the
    caller.
    """
    document: DocumentNode
    variables: Optional[Mapping[str, Any]]
    operation_name: Optional[str]
    result: ExecutionResult


ExtensionsFn = Callable[
    [ExtensionContext],
    Union[Optional[Mapping[str, Any]], Awaitable[Optional[Mapping[str, Any]]]],
]

FormatErrorFn = Callable[[Any], Any]
