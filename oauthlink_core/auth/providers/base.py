"""
Base OAuth provider interface.

This module defines the provider type enumeration, the normalized
authentication result, and the abstract base class for all third-party
login providers.
"""

from abc import ABC, abstractmethod
from datetime import timedelta
from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar
from urllib.parse import urlencode

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from oauthlink_core import get_logger
from oauthlink_core.auth.errors import (
    MalformedResponse,
    ProfileFetchFailed,
    ProviderUnavailable,
    TokenExchangeFailed,
)
from oauthlink_core.auth.transport import HttpTransport
from oauthlink_core.config import ProviderConfig

logger = get_logger(__name__)


class AuthProviderType(str, Enum):
    """Supported external identity services."""

    WEIBO = "weibo"
    GITHUB = "github"
    STRAVA = "strava"

    @classmethod
    def parse(cls, value: "AuthProviderType | str") -> "AuthProviderType":
        """
        Resolve an enum member from a member or identifier string.

        Raises:
            ProviderUnavailable: If the identifier names no supported provider.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as e:
            raise ProviderUnavailable(str(value)) from e


class AuthenticationResult(BaseModel):
    """Normalized result of a successful code exchange."""

    model_config = ConfigDict(frozen=True)

    provider: AuthProviderType
    authentication_id: str  # Provider-scoped user id, never the display name
    access_token: str
    expires_in: timedelta
    display_name: str
    profile_url: str
    image_url: str


class RawPayload(BaseModel):
    """Base for provider wire shapes. Unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


TokenT = TypeVar("TokenT", bound=RawPayload)
ProfileT = TypeVar("ProfileT", bound=RawPayload)


class OAuthProvider(ABC, Generic[TokenT, ProfileT]):
    """
    Abstract base class for OAuth authorization-code providers.

    Subclasses declare their endpoints and wire models, how the profile request
    is authorized, and how the two raw payloads normalize into an
    AuthenticationResult. The exchange sequence itself lives here:

        start -> token_requested -> token_received
              -> profile_requested -> profile_received -> normalized

    Any step may fail; no step is retried.
    """

    provider_type: ClassVar[AuthProviderType]
    authorize_endpoint: ClassVar[str]
    token_endpoint: ClassVar[str]
    profile_endpoint: ClassVar[str]
    token_model: ClassVar[type[RawPayload]]
    profile_model: ClassVar[type[RawPayload]]

    # Provider-fixed query parameters appended to the authorize URL
    authorize_params: ClassVar[dict[str, str]] = {}
    token_headers: ClassVar[dict[str, str]] = {}

    def __init__(self, config: ProviderConfig, transport: HttpTransport) -> None:
        """
        Initialize provider.

        Args:
            config: Immutable credentials for this provider.
            transport: Shared HTTP transport.
        """
        self.config = config
        self.transport = transport

    @property
    def provider_id(self) -> str:
        return self.provider_type.value

    @property
    def client_id(self) -> str:
        return self.config.client_id

    def get_authorization_url(self, redirect_uri: str) -> str:
        """
        Build the authorize-redirect URL.

        Pure function: no I/O, same input gives the same output.

        Args:
            redirect_uri: OAuth callback URL; URL-encoded into the query.

        Returns:
            Authorization URL to redirect the user to.
        """
        params = {
            "client_id": self.client_id,
            "response_type": "code",
            "redirect_uri": redirect_uri,
            **self.authorize_params,
        }
        return f"{self.authorize_endpoint}?{urlencode(params)}"

    def token_request_data(self, code: str, redirect_uri: str) -> dict[str, str]:
        return {
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret,
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": redirect_uri,
        }

    async def authenticate(self, code: str, redirect_uri: str) -> AuthenticationResult:
        """
        Exchange an authorization code for a normalized authentication result.

        Args:
            code: Authorization code from the provider callback.
            redirect_uri: The redirect URL that produced the code.

        Returns:
            AuthenticationResult built from the token and profile responses.

        Raises:
            ValueError: If code or redirect_uri is blank.
            TokenExchangeFailed: Token endpoint returned a non-200 status.
            ProfileFetchFailed: Profile endpoint returned a non-200 status.
            MalformedResponse: A response body did not match the expected shape.
            TransportTimeout: A request exceeded the fixed deadline.
            TransportError: A request failed at the connection level.
        """
        if not code or not redirect_uri:
            raise ValueError("Authorization code and redirect_uri are required")

        logger.debug("[OAuth] {} state=token_requested", self.provider_id)
        response = await self.transport.post_form(
            self.token_endpoint,
            self.token_request_data(code, redirect_uri),
            headers=self.token_headers or None,
            provider=self.provider_id,
            step="token",
        )
        if response.status_code != 200:
            logger.warning(
                "[OAuth] {} token exchange failed: status={}",
                self.provider_id,
                response.status_code,
            )
            raise TokenExchangeFailed(response.status_code, provider=self.provider_id)
        token = self.parse_token(response)
        logger.debug("[OAuth] {} state=token_received", self.provider_id)

        logger.debug("[OAuth] {} state=profile_requested", self.provider_id)
        response = await self.request_profile(token)
        if response.status_code != 200:
            logger.warning(
                "[OAuth] {} profile fetch failed: status={}",
                self.provider_id,
                response.status_code,
            )
            raise ProfileFetchFailed(response.status_code, provider=self.provider_id)
        profile = self.parse_profile(response)
        logger.debug("[OAuth] {} state=profile_received", self.provider_id)

        result = self.normalize(token, profile)
        logger.info(
            "[OAuth] {} authenticated user id={}", self.provider_id, result.authentication_id
        )
        return result

    def parse_token(self, response: httpx.Response) -> TokenT:
        return self._parse_json_response(response, self.token_model, "token")  # type: ignore[return-value]

    def parse_profile(self, response: httpx.Response) -> ProfileT:
        return self._parse_json_response(response, self.profile_model, "profile")  # type: ignore[return-value]

    def _parse_json_response(
        self, response: httpx.Response, model: type[RawPayload], step: str
    ) -> RawPayload:
        try:
            return model.model_validate_json(response.content)
        except ValidationError as e:
            fields = ", ".join(
                ".".join(str(part) for part in error["loc"]) or error["type"]
                for error in e.errors()
            )
            logger.warning("[OAuth] {} malformed {} response: {}", self.provider_id, step, fields)
            raise MalformedResponse(provider=self.provider_id, step=step, detail=fields) from e

    @abstractmethod
    async def request_profile(self, token: TokenT) -> httpx.Response:
        """
        Send the profile request authorized by the obtained token.

        Implementations call ``self.transport.get(..., step="profile")``.
        """

    @abstractmethod
    def normalize(self, token: TokenT, profile: ProfileT) -> AuthenticationResult:
        """
        Map the raw token and profile payloads into an AuthenticationResult.

        Must be a pure function of its inputs.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} provider={self.provider_id}>"


def first_present(*values: Any) -> str:
    """Return the first value that is neither None nor blank, as a string, else ''."""
    for value in values:
        if value is not None and str(value).strip():
            return str(value)
    return ""
