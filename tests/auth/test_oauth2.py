import httpx
import pytest

from facebook_token_backend.app.auth.errors import OAuth2HTTPError
from facebook_token_backend.app.auth.oauth2 import OAuth2Client, append_query


def _client(**kw) -> OAuth2Client:
    return OAuth2Client("id", "secret", "https://auth.example/authorize", "https://auth.example/token", **kw)


def test_append_query():
    assert append_query("https://x.test/me", "a=1") == "https://x.test/me?a=1"
    assert append_query("https://x.test/me?a=1", "b=2") == "https://x.test/me?a=1&b=2"


def test_client_id_required():
    with pytest.raises(ValueError):
        OAuth2Client("", None, "https://a", "https://t")


@pytest.mark.asyncio
async def test_get_token_as_query_param(httpx_mock):
    httpx_mock.add_response(text="ok")
    body, resp = await _client().get("https://x.test/me?fields=id", "a b/c")

    req = httpx_mock.get_request()
    assert req.url.params["fields"] == "id"
    assert req.url.params["access_token"] == "a b/c"
    assert "authorization" not in req.headers
    assert body == "ok"
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_get_header_mode(httpx_mock):
    httpx_mock.add_response(text="ok")
    c = _client()
    c.use_authorization_header_for_get = True
    await c.get("https://x.test/me", "tok")

    req = httpx_mock.get_request()
    assert req.headers["authorization"] == "Bearer tok"
    assert "access_token" not in req.url.params


@pytest.mark.asyncio
async def test_get_non_2xx_raises(httpx_mock):
    httpx_mock.add_response(status_code=500, text="boom")
    with pytest.raises(OAuth2HTTPError) as exc_info:
        await _client().get("https://x.test/me", "tok")
    assert exc_info.value.status_code == 500
    assert exc_info.value.data == "boom"


@pytest.mark.asyncio
async def test_get_transport_error_propagates(httpx_mock):
    httpx_mock.add_exception(httpx.ConnectError("nope"))
    with pytest.raises(httpx.ConnectError):
        await _client().get("https://x.test/me", "tok")
