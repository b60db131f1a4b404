"""TokenLocator: body > query > header > Authorization: Bearer."""

import pytest
from starlette.datastructures import Headers

from facebook_token_backend.app.auth.lookup import RequestView, lookup, parse_oauth2_token


@pytest.mark.parametrize(
    "view",
    [
        RequestView(body={"access_token": "tok"}),
        RequestView(query={"access_token": "tok"}),
        RequestView(headers={"access_token": "tok"}),
        RequestView(headers={"Authorization": "Bearer tok"}),
    ],
    ids=["body", "query", "header", "bearer"],
)
def test_lookup_finds_token_in_each_location(view):
    assert lookup(view, "access_token") == "tok"


def test_body_wins_over_query_header_and_bearer():
    view = RequestView(
        body={"access_token": "from-body"},
        query={"access_token": "from-query"},
        headers={"access_token": "from-header", "authorization": "Bearer from-bearer"},
    )
    assert lookup(view, "access_token") == "from-body"


def test_query_wins_over_header_and_bearer():
    view = RequestView(
        query={"access_token": "from-query"},
        headers={"access_token": "from-header", "authorization": "Bearer from-bearer"},
    )
    assert lookup(view, "access_token") == "from-query"


def test_header_wins_over_bearer():
    view = RequestView(headers={"access_token": "from-header", "authorization": "Bearer from-bearer"})
    assert lookup(view, "access_token") == "from-header"


def test_empty_values_are_skipped():
    view = RequestView(body={"access_token": ""}, query={"access_token": "from-query"})
    assert lookup(view, "access_token") == "from-query"


def test_header_lookup_falls_back_to_lowercased_field_name():
    view = RequestView(headers={"x-fb-token": "tok"})
    assert lookup(view, "X-FB-Token") == "tok"


@pytest.mark.parametrize("header_name", ["Authorization", "authorization"])
def test_bearer_header_name_case_does_not_matter(header_name):
    view = RequestView(headers={header_name: "Bearer abc123"})
    assert parse_oauth2_token(view) == "abc123"
    assert lookup(view, "access_token") == "abc123"


def test_bearer_with_case_insensitive_headers_mapping():
    view = RequestView(headers=Headers({"AUTHORIZATION": "Bearer abc123"}))
    assert lookup(view, "access_token") == "abc123"


@pytest.mark.parametrize("value", ["Basic dXNlcjpwYXNz", "Bearer ", "bearer abc", "token"])
def test_malformed_authorization_header_yields_none(value):
    assert parse_oauth2_token(RequestView(headers={"Authorization": value})) is None


def test_nothing_anywhere_yields_none():
    assert lookup(RequestView(), "access_token") is None
    assert lookup(RequestView(), "refresh_token") is None


def test_bearer_fallback_applies_to_any_field():
    view = RequestView(headers={"Authorization": "Bearer abc123"})
    assert lookup(view, "refresh_token") == "abc123"
