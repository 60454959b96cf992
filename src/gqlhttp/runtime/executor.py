"""
Execution coordinator - runs a parsed document and attaches extensions.

Handles:
- Converting failures raised while *starting* execution into a 400
- Awaiting async execution results
- Computing the optional extensions block after execution settles
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Mapping, Optional

from graphql import DocumentNode, ExecutionResult, GraphQLSchema
from graphql import execute as graphql_execute

from ..core.errors import graphql_error
from .context import ExecuteFn, ExtensionContext, ExtensionsFn

logger = logging.getLogger(__name__)


async def execute_document(
    schema: GraphQLSchema,
    root_value: Any,
    context: Any,
    extensions: Optional[ExtensionsFn],
    document: DocumentNode,
    variables: Optional[Mapping[str, Any]] = None,
    operation_name: Optional[str] = None,
    *,
    execute_fn: ExecuteFn = graphql_execute,
) -> ExecutionResult:
    """
    Execute a document and return its result.

    Args:
        schema: Schema to execute against
        root_value: Root value passed to top-level resolvers
        context: Context value passed to every resolver
        extensions: Optional hook producing the result's ``extensions``
        document: Parsed and validated document
        variables: Variable values
        operation_name: Operation to run when the document has several
        execute_fn: Execution capability (graphql-core's ``execute`` by default)

    Returns:
        ExecutionResult; resolver errors stay in ``result.errors``

    Raises:
        ProtocolError: 400 if the execution could not be started
    """
    try:
        outcome = execute_fn(
            schema,
            document,
            root_value,
            context,
            variables,
            operation_name,
        )
    except Exception as e:
        logger.debug(f"Execution could not start: {e!r}")
        raise graphql_error(400, [e]) from e

    result = await outcome if inspect.isawaitable(outcome) else outcome

    if extensions is not None:
        result.extensions = await _compute_extensions(
            extensions,
            ExtensionContext(
                document=document,
                variables=variables,
                operation_name=operation_name,
                result=result,
            ),
        )

    return result


async def _compute_extensions(
    extensions: ExtensionsFn,
    info: ExtensionContext,
) -> Optional[dict[str, Any]]:
    """Run the extensions hook; a failing hook leaves the result without extensions."""
    try:
        value = extensions(info)
        if inspect.isawaitable(value):
            value = await value
    except Exception as e:
        logger.warning(f"Extensions hook failed, responding without extensions: {e!r}", exc_info=True)
        return info.result.extensions

    if value is None:
        return None
    if not isinstance(value, Mapping):
        logger.warning(
            f"Extensions hook returned {type(value).__name__}, expected a mapping; "
            f"responding without extensions"
        )
        return info.result.extensions

    return dict(value)
