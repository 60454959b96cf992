from gqlhttp.core.negotiation import accepts_types, can_display_graphiql, parse_accept
from gqlhttp.core.params import GraphQLParams
from gqlhttp.core.request import RawRequest


def _request(accept=None):
    headers = {"accept": accept} if accept is not None else {}
    return RawRequest(headers=headers)


def test_html_request_shows_graphiql():
    assert can_display_graphiql(_request("text/html"), GraphQLParams(raw=False)) is True


def test_raw_request_never_shows_graphiql():
    assert can_display_graphiql(_request("text/html"), GraphQLParams(raw=True)) is False


def test_json_request_does_not_show_graphiql():
    assert can_display_graphiql(_request("application/json"), GraphQLParams(raw=False)) is False


def test_missing_accept_prefers_json():
    assert can_display_graphiql(_request(), GraphQLParams()) is False


def test_wildcard_accept_prefers_json():
    assert can_display_graphiql(_request("*/*"), GraphQLParams()) is False


def test_browser_accept_header_shows_graphiql():
    accept = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
    assert can_display_graphiql(_request(accept), GraphQLParams()) is True


def test_quality_decides_between_candidates():
    assert accepts_types("text/html;q=0.5, application/json", ["json", "html"]) == "json"
    assert accepts_types("application/json;q=0.5, text/html", ["json", "html"]) == "html"


def test_zero_quality_excludes_type():
    assert accepts_types("text/html;q=0", ["json", "html"]) is None
    assert accepts_types("text/*, text/html;q=0", ["html"]) is None


def test_specific_range_beats_wildcard():
    assert accepts_types("*/*;q=0.1, text/html", ["json", "html"]) == "html"


def test_full_mime_candidates_are_returned_as_given():
    assert accepts_types("application/json", ["text/html", "application/json"]) == "application/json"


def test_parse_accept_skips_malformed_entries():
    ranges = parse_accept("text/html, garbage, , application/json;q=0.4")

    assert [(r.type, r.subtype, r.q) for r in ranges] == [
        ("text", "html", 1.0),
        ("application", "json", 0.4),
    ]
