from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any
from urllib.parse import parse_qs, urlsplit

import httpx
import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa

from postboard_backend.api.dependencies import SESSION_COOKIE, get_auth_service
from postboard_backend.api.services import AuthenticationError, AuthService
from postboard_backend.settings import get_settings

if TYPE_CHECKING:
    from collections.abc import Iterator

    from fastapi.testclient import TestClient


class FakeAuthService(AuthService):
    """Skips the provider round trip and trusts any code it is given."""

    def complete_login(self, code: str) -> str:
        if code == "rejected":
            msg = "Invalid ID token"
            raise AuthenticationError(msg)
        return self.create_access_token(f"auth0|{code}")


class StaticJWKClient:
    """Returns one signing key regardless of the token header."""

    def __init__(self, key: Any) -> None:
        self.key = key

    def get_signing_key_from_jwt(self, _token: str) -> StaticJWKClient:
        return self


@pytest.fixture
def auth_service() -> FakeAuthService:
    return FakeAuthService(settings=get_settings())


@pytest.fixture
def auth_client(
    client: TestClient, auth_service: FakeAuthService
) -> Iterator[TestClient]:
    client.app.dependency_overrides[get_auth_service] = lambda: auth_service
    yield client


@pytest.fixture
def auth_enabled(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AUTH_ENABLED", "true")
    get_settings.cache_clear()


@pytest.fixture
def rsa_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


def _id_token(key: rsa.RSAPrivateKey, **overrides: Any) -> str:
    claims = {
        "sub": "auth0|42",
        "aud": "test-client",
        "iss": "https://idp.example.com/",
        "exp": datetime.now(UTC) + timedelta(minutes=5),
    }
    claims.update(overrides)
    return jwt.encode(claims, key, algorithm="RS256")


def test_login_redirects_to_provider(auth_client: TestClient) -> None:
    response = auth_client.get("/login", follow_redirects=False)

    assert response.status_code == 302
    location = urlsplit(response.headers["location"])
    query = parse_qs(location.query)
    assert f"{location.scheme}://{location.netloc}{location.path}" == (
        "https://idp.example.com/authorize"
    )
    assert query["client_id"] == ["test-client"]
    assert query["response_type"] == ["code"]
    assert query["scope"] == ["openid profile email"]
    assert query["redirect_uri"] == [
        "http://localhost:8000/login/oauth2/code/auth0"
    ]
    assert response.cookies["oauth_state"] == query["state"][0]


def test_callback_opens_session(auth_client: TestClient) -> None:
    login = auth_client.get("/login", follow_redirects=False)
    state = parse_qs(urlsplit(login.headers["location"]).query)["state"][0]

    response = auth_client.get(
        "/login/oauth2/code/auth0",
        params={"code": "abc", "state": state},
        follow_redirects=False,
    )

    assert response.status_code == 302
    assert response.headers["location"] == "/users"
    token = response.cookies[SESSION_COOKIE]
    assert jwt.decode(token, "test-secret-key", algorithms=["HS256"])["sub"] == (
        "auth0|abc"
    )


def test_callback_rejects_state_mismatch(auth_client: TestClient) -> None:
    auth_client.get("/login", follow_redirects=False)

    response = auth_client.get(
        "/login/oauth2/code/auth0",
        params={"code": "abc", "state": "forged"},
        follow_redirects=False,
    )

    assert response.status_code == 400


def test_callback_unknown_registration(auth_client: TestClient) -> None:
    response = auth_client.get(
        "/login/oauth2/code/github", params={"code": "abc", "state": "s"}
    )

    assert response.status_code == 404


def test_callback_reports_provider_error(auth_client: TestClient) -> None:
    response = auth_client.get(
        "/login/oauth2/code/auth0", params={"error": "access_denied"}
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "access_denied"


def test_callback_rejected_login(auth_client: TestClient) -> None:
    auth_client.cookies.set("oauth_state", "s")

    response = auth_client.get(
        "/login/oauth2/code/auth0",
        params={"code": "rejected", "state": "s"},
        follow_redirects=False,
    )

    assert response.status_code == 401


def test_logout_redirects_to_provider(auth_client: TestClient) -> None:
    response = auth_client.get("/logout", follow_redirects=False)

    assert response.status_code == 302
    location = urlsplit(response.headers["location"])
    assert location.netloc == "idp.example.com"
    assert location.path == "/oidc/logout"
    assert parse_qs(location.query)["client_id"] == ["test-client"]


@pytest.mark.usefixtures("auth_enabled")
def test_protected_route_requires_credentials(auth_client: TestClient) -> None:
    response = auth_client.get("/users")

    assert response.status_code == 401
    assert response.json()["detail"] == "Missing credentials"


@pytest.mark.usefixtures("auth_enabled")
def test_protected_route_rejects_invalid_token(auth_client: TestClient) -> None:
    response = auth_client.get(
        "/posts", headers={"Authorization": "Bearer not-a-token"}
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token"


@pytest.mark.usefixtures("auth_enabled")
def test_protected_route_accepts_bearer_token(
    auth_client: TestClient, auth_service: FakeAuthService
) -> None:
    token = auth_service.create_access_token("auth0|7")

    response = auth_client.get("/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json() == {"subject": "auth0|7"}
    assert auth_client.get(
        "/users", headers={"Authorization": f"Bearer {token}"}
    ).status_code == 200


@pytest.mark.usefixtures("auth_enabled")
def test_protected_route_accepts_session_cookie(
    auth_client: TestClient, auth_service: FakeAuthService
) -> None:
    auth_client.cookies.set(SESSION_COOKIE, auth_service.create_access_token("u"))

    assert auth_client.get("/posts").status_code == 200


def test_me_without_authentication(auth_client: TestClient) -> None:
    assert auth_client.get("/me").status_code == 404


def test_exchange_code_posts_to_token_endpoint() -> None:
    seen: dict[str, Any] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["form"] = parse_qs(request.content.decode())
        return httpx.Response(200, json={"id_token": "token"})

    service = AuthService(
        settings=get_settings(),
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )

    assert service.exchange_code("xyz") == {"id_token": "token"}
    assert seen["url"] == "https://idp.example.com/oauth/token"
    assert seen["form"]["grant_type"] == ["authorization_code"]
    assert seen["form"]["code"] == ["xyz"]


def test_exchange_code_failure() -> None:
    service = AuthService(
        settings=get_settings(),
        http_client=httpx.Client(
            transport=httpx.MockTransport(lambda _request: httpx.Response(403))
        ),
    )

    with pytest.raises(AuthenticationError):
        service.exchange_code("xyz")


def test_verify_id_token(rsa_key: rsa.RSAPrivateKey) -> None:
    service = AuthService(
        settings=get_settings(), jwks_client=StaticJWKClient(rsa_key.public_key())
    )

    claims = service.verify_id_token(_id_token(rsa_key))

    assert claims["sub"] == "auth0|42"


@pytest.mark.parametrize(
    "overrides",
    [
        {"aud": "someone-else"},
        {"iss": "https://evil.example.com/"},
        {"exp": datetime(2020, 1, 1, tzinfo=UTC)},
    ],
)
def test_verify_id_token_rejects_bad_claims(
    rsa_key: rsa.RSAPrivateKey, overrides: dict[str, Any]
) -> None:
    service = AuthService(
        settings=get_settings(), jwks_client=StaticJWKClient(rsa_key.public_key())
    )

    with pytest.raises(AuthenticationError):
        service.verify_id_token(_id_token(rsa_key, **overrides))


def test_complete_login_issues_session_token(rsa_key: rsa.RSAPrivateKey) -> None:
    id_token = _id_token(rsa_key)
    service = AuthService(
        settings=get_settings(),
        http_client=httpx.Client(
            transport=httpx.MockTransport(
                lambda _request: httpx.Response(200, json={"id_token": id_token})
            )
        ),
        jwks_client=StaticJWKClient(rsa_key.public_key()),
    )

    token = service.complete_login("code")

    assert service.decode_access_token(token).sub == "auth0|42"


@pytest.mark.usefixtures("auth_enabled")
def test_token_signed_with_another_key_is_rejected(auth_client: TestClient) -> None:
    forged = jwt.encode(
        {"sub": "intruder", "exp": datetime.now(UTC) + timedelta(minutes=5)},
        "change-me-in-production",
        algorithm="HS256",
    )

    response = auth_client.get(
        "/users", headers={"Authorization": f"Bearer {forged}"}
    )

    assert response.status_code == 401


def test_cookies_are_secure_when_configured(
    auth_client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("AUTH_COOKIE_SECURE", "true")
    get_settings.cache_clear()

    response = auth_client.get("/login", follow_redirects=False)

    assert "secure" in response.headers["set-cookie"].lower()


def test_cookies_are_not_secure_when_disabled(auth_client: TestClient) -> None:
    response = auth_client.get("/login", follow_redirects=False)

    assert "secure" not in response.headers["set-cookie"].lower()
