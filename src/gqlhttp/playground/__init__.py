"""
GraphiQL page - interactive in-browser IDE.

Rendered on the GraphQL endpoint itself when a browser asks for HTML.

Usage:
    from gqlhttp.playground import get_graphiql_html

    html = get_graphiql_html(params, result=envelope)
"""

from __future__ import annotations

import html
import json
from typing import Any, Optional

from ..core.params import GraphQLParams


GRAPHIQL_VERSION = "3.0.9"
REACT_VERSION = "18.2.0"

_TEMPLATE = """<!--
The request to this GraphQL server provided the header "Accept: text/html"
and as a result has been presented GraphiQL - an in-browser IDE for
exploring GraphQL.

If you wish to receive JSON, provide the header "Accept: application/json" or
add "&raw" to the end of the URL within a browser.
-->
<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8" />
  <title>{title}</title>
  <style>
    body {{ height: 100%; margin: 0; width: 100%; overflow: hidden; }}
    #graphiql {{ height: 100vh; }}
  </style>
  <link href="https://unpkg.com/graphiql@{graphiql_version}/graphiql.min.css" rel="stylesheet" />
  <script src="https://unpkg.com/react@{react_version}/umd/react.production.min.js"></script>
  <script src="https://unpkg.com/react-dom@{react_version}/umd/react-dom.production.min.js"></script>
  <script src="https://unpkg.com/graphiql@{graphiql_version}/graphiql.min.js"></script>
</head>
<body>
  <div id="graphiql">Loading...</div>
  <script>
    var initialQuery = {query};
    var initialVariables = {variables};
    var initialOperationName = {operation_name};
    var initialResponse = {result};

    // Keep the URL in sync with the editors so the page can be shared
    var parameters = {{}};
    window.location.search.substr(1).split('&').forEach(function (entry) {{
      var eq = entry.indexOf('=');
      if (eq >= 0) {{
        parameters[decodeURIComponent(entry.slice(0, eq))] =
          decodeURIComponent(entry.slice(eq + 1));
      }}
    }});

    function updateURL() {{
      var query = '?' + Object.keys(parameters).filter(function (key) {{
        return Boolean(parameters[key]);
      }}).map(function (key) {{
        return encodeURIComponent(key) + '=' + encodeURIComponent(parameters[key]);
      }}).join('&');
      history.replaceState(null, null, query);
    }}

    var fetcher = GraphiQL.createFetcher({{ url: window.location.pathname }});

    ReactDOM.render(
      React.createElement(GraphiQL, {{
        fetcher: fetcher,
        query: initialQuery,
        variables: initialVariables,
        operationName: initialOperationName,
        response: initialResponse,
        onEditQuery: function (value) {{ parameters.query = value; updateURL(); }},
        onEditVariables: function (value) {{ parameters.variables = value; updateURL(); }},
        onEditOperationName: function (value) {{ parameters.operationName = value; updateURL(); }},
      }}),
      document.getElementById('graphiql')
    );
  </script>
</body>
</html>
"""


def safe_serialize(value: Any) -> str:
    """JSON-encode a value for inlining in a <script> block."""
    if value is None:
        return "undefined"
    return (
        json.dumps(value)
        .replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("&", "\\u0026")
    )


def get_graphiql_html(
    params: GraphQLParams,
    result: Optional[dict[str, Any]] = None,
    *,
    title: str = "GraphiQL",
) -> str:
    """
    Render the GraphiQL page.

    Args:
        params: Request parameters used to seed the editors
        result: Envelope to show in the result pane, if the query ran
        title: Page title

    Returns:
        HTML string
    """
    variables = json.dumps(params.variables, indent=2) if params.variables else None
    result_json = json.dumps(result, indent=2) if result is not None else None

    return _TEMPLATE.format(
        title=html.escape(title),
        graphiql_version=GRAPHIQL_VERSION,
        react_version=REACT_VERSION,
        query=safe_serialize(params.query),
        variables=safe_serialize(variables),
        operation_name=safe_serialize(params.operation_name),
        result=safe_serialize(result_json),
    )


__all__ = [
    "get_graphiql_html",
    "safe_serialize",
    "GRAPHIQL_VERSION",
]
