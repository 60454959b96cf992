from gqlhttp.core.params import GraphQLParams
from gqlhttp.playground import get_graphiql_html, safe_serialize


def test_script_breaking_input_is_escaped():
    params = GraphQLParams(query="{ hello } </script><script>alert(1)</script>")

    html = get_graphiql_html(params)

    assert "</script><script>alert(1)" not in html
    assert "\\u003c/script\\u003e" in html


def test_missing_values_render_as_undefined():
    assert safe_serialize(None) == "undefined"


def test_variables_and_operation_name_are_seeded():
    params = GraphQLParams(query="query Q { hello }", variables={"a": 1}, operation_name="Q")

    html = get_graphiql_html(params, {"data": {"hello": "x"}}, title="My <API>")

    assert 'var initialOperationName = "Q";' in html
    assert "<title>My &lt;API&gt;</title>" in html
