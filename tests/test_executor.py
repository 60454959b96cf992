import pytest
from graphql import ExecutionResult, parse

from gqlhttp.core.errors import ProtocolError
from gqlhttp.runtime.context import ExtensionContext
from gqlhttp.runtime.executor import execute_document


@pytest.mark.asyncio
async def test_executes_document(schema, root):
    result = await execute_document(
        schema, root, None, None, parse('query Q($n: String) { hello(name: $n) }'), {"n": "Ivan"}, "Q"
    )

    assert result.data == {"hello": "Hello Ivan"}
    assert result.errors is None
    assert result.extensions is None


@pytest.mark.asyncio
async def test_awaits_async_resolvers(schema, root):
    result = await execute_document(schema, root, None, None, parse("{ slowHello }"))

    assert result.data == {"slowHello": "Hello World"}


@pytest.mark.asyncio
async def test_resolver_errors_stay_in_result(schema, root):
    result = await execute_document(schema, root, None, None, parse("{ boom hello }"))

    assert result.data == {"boom": None, "hello": "Hello World"}
    assert [error.message for error in result.errors] == ["Boom!"]


@pytest.mark.asyncio
async def test_setup_failure_becomes_400(schema):
    with pytest.raises(ProtocolError) as exc_info:
        await execute_document(schema, None, None, None, None)

    assert exc_info.value.status == 400
    assert len(exc_info.value.errors) == 1
    assert isinstance(exc_info.value.errors[0], TypeError)


@pytest.mark.asyncio
async def test_custom_execute_fn_failure_becomes_400(schema):
    error = RuntimeError("context could not be built")

    def execute_fn(*args):
        raise error

    with pytest.raises(ProtocolError) as exc_info:
        await execute_document(schema, None, None, None, parse("{ hello }"), execute_fn=execute_fn)

    assert exc_info.value.errors == [error]


@pytest.mark.asyncio
async def test_sync_extensions_are_attached(schema, root):
    seen = []

    def extensions(info: ExtensionContext):
        seen.append(info)
        return {"operation": info.operation_name, "hasData": info.result.data is not None}

    document = parse("query Q { hello }")
    result = await execute_document(schema, root, None, extensions, document, None, "Q")

    assert result.extensions == {"operation": "Q", "hasData": True}
    assert seen[0].result is result
    assert seen[0].document is document


@pytest.mark.asyncio
async def test_async_extensions_are_awaited(schema, root):
    async def extensions(info):
        return {"runTime": 42}

    result = await execute_document(schema, root, None, extensions, parse("{ slowHello }"))

    assert result.extensions == {"runTime": 42}


@pytest.mark.asyncio
async def test_failing_extensions_do_not_fail_the_request(schema, root):
    def extensions(info):
        raise RuntimeError("metrics backend down")

    result = await execute_document(schema, root, None, extensions, parse("{ hello }"))

    assert result.data == {"hello": "Hello World"}
    assert result.extensions is None


@pytest.mark.asyncio
async def test_custom_execute_fn_receives_all_arguments(schema):
    calls = []

    async def execute_fn(schema_, document, root_value, context, variables, operation_name):
        calls.append((root_value, context, variables, operation_name))
        return ExecutionResult(data={"hello": "stub"})

    result = await execute_document(
        schema, "root", "ctx", None, parse("{ hello }"), {"v": 1}, "Op", execute_fn=execute_fn
    )

    assert result.data == {"hello": "stub"}
    assert calls == [("root", "ctx", {"v": 1}, "Op")]


@pytest.mark.asyncio
@pytest.mark.parametrize("value", [42, ["timing"], "timing"])
async def test_non_mapping_extensions_are_dropped(schema, root, value):
    async def extensions(info):
        return value

    result = await execute_document(schema, root, None, extensions, parse("{ hello }"))

    assert result.data == {"hello": "Hello World"}
    assert result.extensions is None
