import pytest

from gqlhttp.core.errors import ProtocolError
from gqlhttp.core.params import GraphQLParams, get_graphql_params


def test_url_parameters_take_precedence_over_body():
    params = get_graphql_params(
        {"query": "{ fromUrl }"},
        {"query": "{ fromBody }", "operationName": "Op"},
    )

    assert params.query == "{ fromUrl }"
    assert params.operation_name == "Op"


def test_variables_json_string_is_decoded():
    params = get_graphql_params({"query": "{ a }", "variables": '{"x": 1}'}, {})
    assert params.variables == {"x": 1}


def test_invalid_variables_json_is_a_400():
    with pytest.raises(ProtocolError) as exc_info:
        get_graphql_params({"variables": "{not json"}, {})

    assert exc_info.value.status == 400
    assert exc_info.value.errors == [{"message": "Variables are invalid JSON."}]


def test_non_object_variables_are_rejected():
    with pytest.raises(ProtocolError):
        get_graphql_params({}, {"variables": [1, 2]})


def test_raw_flag_is_set_by_presence():
    assert get_graphql_params({"raw": ""}, {}).raw is True
    assert get_graphql_params({}, {"raw": False}).raw is True
    assert get_graphql_params({}, {}).raw is False


def test_params_accept_wire_names():
    params = GraphQLParams.model_validate({"query": "{ a }", "operationName": "A"})
    assert params.operation_name == "A"
