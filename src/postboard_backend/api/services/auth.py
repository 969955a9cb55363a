"""OpenID Connect login handshake and session tokens."""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any
from urllib.parse import urlencode, urljoin

import httpx
import jwt

from postboard_backend.settings import BackendSettings, get_settings

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """Raised when the identity provider handshake cannot be completed."""


@dataclass(slots=True)
class TokenPayload:
    """Represents encoded token metadata."""

    sub: str
    exp: datetime


@dataclass(slots=True)
class ProviderEndpoints:
    """URLs of the identity provider used during login and logout."""

    authorization: str
    token: str
    jwks: str
    end_session: str

    @classmethod
    def from_settings(cls, config: BackendSettings) -> ProviderEndpoints:
        issuer = config.oidc_issuer
        return cls(
            authorization=config.oidc_authorization_endpoint
            or urljoin(issuer, "authorize"),
            token=config.oidc_token_endpoint or urljoin(issuer, "oauth/token"),
            jwks=config.oidc_jwks_uri or urljoin(issuer, ".well-known/jwks.json"),
            end_session=config.oidc_end_session_endpoint
            or urljoin(issuer, "oidc/logout"),
        )


class AuthService:
    """Builds provider redirects, verifies ID tokens and issues session tokens."""

    def __init__(
        self,
        *,
        secret_key: str | None = None,
        algorithm: str = "HS256",
        access_token_ttl_minutes: int | None = None,
        settings: BackendSettings | None = None,
        http_client: httpx.Client | None = None,
        jwks_client: jwt.PyJWKClient | None = None,
    ) -> None:
        config = settings or get_settings()
        self._config = config
        self._secret_key = secret_key or config.auth_secret_key
        self._algorithm = algorithm
        self._access_token_ttl = timedelta(
            minutes=access_token_ttl_minutes or config.access_token_ttl_minutes
        )
        self._endpoints = ProviderEndpoints.from_settings(config)
        self._http_client = http_client
        self._jwks_client = jwks_client

    @property
    def registration_id(self) -> str:
        return self._config.oidc_registration_id

    @property
    def redirect_uri(self) -> str:
        base = self._config.oidc_redirect_base_url.rstrip("/")
        return f"{base}/login/oauth2/code/{self.registration_id}"

    @staticmethod
    def new_state() -> str:
        """Return an unguessable value binding the callback to this browser."""
        return secrets.token_urlsafe(32)

    def build_authorization_url(self, state: str) -> str:
        query = urlencode(
            {
                "response_type": "code",
                "client_id": self._config.oidc_client_id,
                "redirect_uri": self.redirect_uri,
                "scope": " ".join(self._config.oidc_scopes),
                "state": state,
            }
        )
        return f"{self._endpoints.authorization}?{query}"

    def build_logout_url(self) -> str:
        query = urlencode(
            {
                "client_id": self._config.oidc_client_id,
                "post_logout_redirect_uri": self._config.post_logout_redirect_url,
            }
        )
        return f"{self._endpoints.end_session}?{query}"

    def exchange_code(self, code: str) -> dict[str, Any]:
        """Trade an authorization code for the provider's token response."""
        data = {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": self.redirect_uri,
            "client_id": self._config.oidc_client_id,
            "client_secret": self._config.oidc_client_secret,
        }
        try:
            if self._http_client is not None:
                response = self._http_client.post(self._endpoints.token, data=data)
            else:
                response = httpx.post(self._endpoints.token, data=data, timeout=10.0)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Token exchange failed: %s", exc)
            msg = "Token exchange failed"
            raise AuthenticationError(msg) from exc
        return response.json()

    def verify_id_token(self, id_token: str) -> dict[str, Any]:
        """Check the ID token signature, audience and issuer; return its claims."""
        if self._jwks_client is None:
            self._jwks_client = jwt.PyJWKClient(self._endpoints.jwks)
        try:
            signing_key = self._jwks_client.get_signing_key_from_jwt(id_token)
            return jwt.decode(
                id_token,
                signing_key.key,
                algorithms=["RS256"],
                audience=self._config.oidc_client_id,
                issuer=self._config.oidc_issuer,
            )
        except jwt.PyJWTError as exc:
            logger.warning("ID token rejected: %s", exc)
            msg = "Invalid ID token"
            raise AuthenticationError(msg) from exc

    def complete_login(self, code: str) -> str:
        """Run the code exchange and return a session token for the subject."""
        tokens = self.exchange_code(code)
        id_token = tokens.get("id_token")
        if not id_token:
            msg = "Provider response has no ID token"
            raise AuthenticationError(msg)
        claims = self.verify_id_token(id_token)
        logger.info("Login completed for subject %s", claims["sub"])
        return self.create_access_token(claims["sub"])

    def create_access_token(self, subject: str) -> str:
        expires_at = datetime.now(tz=timezone.utc) + self._access_token_ttl
        payload = {"sub": subject, "exp": expires_at}
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def decode_access_token(self, token: str) -> TokenPayload:
        data = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        return TokenPayload(
            sub=data["sub"], exp=datetime.fromtimestamp(data["exp"], tz=timezone.utc)
        )
