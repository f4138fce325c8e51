"""Unit tests for the Weibo provider."""

from datetime import timedelta
from urllib.parse import parse_qs, quote_plus, urlparse

import pytest
from conftest import FakeProviderAPI, form_body, make_config

from oauthlink_core.auth.errors import MalformedResponse, ProfileFetchFailed, TokenExchangeFailed
from oauthlink_core.auth.providers import AuthProviderType, WeiboProvider
from oauthlink_core.auth.transport import HttpTransport

TOKEN_URL = "https://api.weibo.com/oauth2/access_token"
PROFILE_URL = "https://api.weibo.com/2/users/show.json"
REDIRECT = "https://www.example.com/auth/callback?from=weibo&next=/wiki/1"


def _token_payload(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "access_token": "2.00weibo-token",
        "expires_in": 157679999,
        "remind_in": "157679999",
        "uid": "1404376560",
    }
    payload.update(overrides)
    return payload


def _user_payload(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "id": 1404376560,
        "idstr": "1404376560",
        "screen_name": "zaku",
        "domain": "zaku",
        "profile_image_url": "https://tva1.sinaimg.cn/crop.0.0.180.180.50/5c18a36a.jpg",
    }
    payload.update(overrides)
    return payload


def _make_provider(transport: HttpTransport) -> WeiboProvider:
    return WeiboProvider(make_config(client_id="weibo-app"), transport)


def test_authorization_url_encodes_redirect(transport: HttpTransport) -> None:
    provider = _make_provider(transport)

    url = provider.get_authorization_url(REDIRECT)

    assert url.startswith("https://api.weibo.com/oauth2/authorize?")
    assert f"redirect_uri={quote_plus(REDIRECT)}" in url
    query = parse_qs(urlparse(url).query)
    assert query["client_id"] == ["weibo-app"]
    assert query["response_type"] == ["code"]
    assert query["redirect_uri"] == [REDIRECT]


def test_authorization_url_is_deterministic_and_offline(
    transport: HttpTransport, fake_api: FakeProviderAPI
) -> None:
    provider = _make_provider(transport)

    first = provider.get_authorization_url(REDIRECT)
    second = provider.get_authorization_url(REDIRECT)

    assert first == second
    assert fake_api.requests == []


@pytest.mark.asyncio
async def test_authenticate_normalizes_token_and_profile(
    transport: HttpTransport, fake_api: FakeProviderAPI
) -> None:
    # Profile idstr differs from the token uid to prove where the id comes from
    fake_api.reply("POST", TOKEN_URL, json=_token_payload())
    fake_api.reply("GET", PROFILE_URL, json=_user_payload(idstr="999"))
    provider = _make_provider(transport)

    result = await provider.authenticate("auth-code", REDIRECT)

    assert result.provider is AuthProviderType.WEIBO
    assert result.authentication_id == "1404376560"
    assert result.access_token == "2.00weibo-token"
    assert result.expires_in == timedelta(seconds=157679999)
    assert result.display_name == "zaku"
    assert result.profile_url == "https://weibo.com/zaku"
    assert result.image_url == "https://tva1.sinaimg.cn/crop.0.0.180.180.50/5c18a36a.jpg"


@pytest.mark.asyncio
async def test_authenticate_sends_expected_wire_requests(
    transport: HttpTransport, fake_api: FakeProviderAPI
) -> None:
    fake_api.reply("POST", TOKEN_URL, json=_token_payload())
    fake_api.reply("GET", PROFILE_URL, json=_user_payload())
    provider = WeiboProvider(make_config(client_id="weibo-app", client_secret="s3cret"), transport)

    await provider.authenticate("auth-code", REDIRECT)

    [token_request] = fake_api.calls("POST", TOKEN_URL)
    assert token_request.headers["content-type"].startswith("application/x-www-form-urlencoded")
    assert form_body(token_request) == {
        "client_id": "weibo-app",
        "client_secret": "s3cret",
        "grant_type": "authorization_code",
        "code": "auth-code",
        "redirect_uri": REDIRECT,
    }
    assert f"redirect_uri={quote_plus(REDIRECT)}" in token_request.content.decode()

    [profile_request] = fake_api.calls("GET", PROFILE_URL)
    assert profile_request.url.params["uid"] == "1404376560"
    assert profile_request.headers["authorization"] == "OAuth2 2.00weibo-token"


@pytest.mark.asyncio
async def test_numeric_uid_is_coerced_to_string(
    transport: HttpTransport, fake_api: FakeProviderAPI
) -> None:
    fake_api.reply("POST", TOKEN_URL, json=_token_payload(uid=1404376560))
    fake_api.reply("GET", PROFILE_URL, json=_user_payload())

    result = await _make_provider(transport).authenticate("code", REDIRECT)

    assert result.authentication_id == "1404376560"


@pytest.mark.asyncio
@pytest.mark.parametrize("domain", [None, ""])
async def test_profile_url_falls_back_to_idstr_without_domain(
    transport: HttpTransport, fake_api: FakeProviderAPI, domain: str | None
) -> None:
    user = _user_payload(idstr="5187664653")
    user["domain"] = domain
    fake_api.reply("POST", TOKEN_URL, json=_token_payload())
    fake_api.reply("GET", PROFILE_URL, json=user)

    result = await _make_provider(transport).authenticate("code", REDIRECT)

    assert result.profile_url == "https://weibo.com/5187664653"


@pytest.mark.asyncio
async def test_profile_url_falls_back_when_domain_key_missing(
    transport: HttpTransport, fake_api: FakeProviderAPI
) -> None:
    user = _user_payload(idstr="5187664653")
    del user["domain"]
    fake_api.reply("POST", TOKEN_URL, json=_token_payload())
    fake_api.reply("GET", PROFILE_URL, json=user)

    result = await _make_provider(transport).authenticate("code", REDIRECT)

    assert result.profile_url == "https://weibo.com/5187664653"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "nulls,field,expected",
    [
        ({"idstr": None}, "profile_url", "https://weibo.com/zaku"),
        ({"screen_name": None}, "display_name", ""),
        ({"profile_image_url": None}, "image_url", ""),
        ({"domain": None, "idstr": None}, "profile_url", "https://weibo.com/1404376560"),
    ],
)
async def test_null_profile_fields_are_tolerated(
    transport: HttpTransport,
    fake_api: FakeProviderAPI,
    nulls: dict[str, None],
    field: str,
    expected: str,
) -> None:
    fake_api.reply("POST", TOKEN_URL, json=_token_payload())
    fake_api.reply("GET", PROFILE_URL, json=_user_payload(**nulls))

    result = await _make_provider(transport).authenticate("code", REDIRECT)

    assert getattr(result, field) == expected
    assert result.authentication_id == "1404376560"


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [400, 401, 500, 502])
async def test_token_failure_stops_before_profile(
    transport: HttpTransport, fake_api: FakeProviderAPI, status_code: int
) -> None:
    fake_api.reply("POST", TOKEN_URL, status_code, json={"error": "invalid_grant"})
    fake_api.reply("GET", PROFILE_URL, json=_user_payload())

    with pytest.raises(TokenExchangeFailed) as exc_info:
        await _make_provider(transport).authenticate("code", REDIRECT)

    assert exc_info.value.status_code == status_code
    assert exc_info.value.step == "token"
    assert exc_info.value.provider == "weibo"
    assert fake_api.calls("GET", PROFILE_URL) == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "content",
    [b"<html>oops</html>", b"[]", b'{"access_token": "t"}', b""],
)
async def test_unparseable_token_is_malformed_and_stops(
    transport: HttpTransport, fake_api: FakeProviderAPI, content: bytes
) -> None:
    fake_api.reply("POST", TOKEN_URL, content=content)
    fake_api.reply("GET", PROFILE_URL, json=_user_payload())

    with pytest.raises(MalformedResponse) as exc_info:
        await _make_provider(transport).authenticate("code", REDIRECT)

    assert exc_info.value.step == "token"
    assert fake_api.calls("GET", PROFILE_URL) == []


@pytest.mark.asyncio
async def test_profile_failure_reports_status(
    transport: HttpTransport, fake_api: FakeProviderAPI
) -> None:
    fake_api.reply("POST", TOKEN_URL, json=_token_payload())
    fake_api.reply("GET", PROFILE_URL, 403, json={"error": "forbidden"})

    with pytest.raises(ProfileFetchFailed) as exc_info:
        await _make_provider(transport).authenticate("code", REDIRECT)

    assert exc_info.value.status_code == 403
    assert exc_info.value.step == "profile"


@pytest.mark.asyncio
async def test_unparseable_profile_is_malformed(
    transport: HttpTransport, fake_api: FakeProviderAPI
) -> None:
    fake_api.reply("POST", TOKEN_URL, json=_token_payload())
    fake_api.reply("GET", PROFILE_URL, content=b"not json")

    with pytest.raises(MalformedResponse) as exc_info:
        await _make_provider(transport).authenticate("code", REDIRECT)

    assert exc_info.value.step == "profile"


@pytest.mark.asyncio
@pytest.mark.parametrize("code,redirect", [("", REDIRECT), ("code", "")])
async def test_authenticate_requires_code_and_redirect(
    transport: HttpTransport, fake_api: FakeProviderAPI, code: str, redirect: str
) -> None:
    with pytest.raises(ValueError, match="required"):
        await _make_provider(transport).authenticate(code, redirect)

    assert fake_api.requests == []
