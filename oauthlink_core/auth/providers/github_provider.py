"""
GitHub OAuth provider.

GitHub's token endpoint does not return the user id, so the identity id comes
from the profile response. Only expiring user tokens (GitHub Apps) are accepted:
a token response without ``expires_in`` is malformed. With
``Accept: application/json`` the token endpoint reports a bad code as HTTP 200
with an ``error`` field.
"""

from datetime import timedelta

import httpx

from oauthlink_core.auth.errors import MalformedResponse

from .base import AuthenticationResult, AuthProviderType, OAuthProvider, RawPayload, first_present

GITHUB_PROFILE_BASE = "https://github.com/"


class GitHubToken(RawPayload):
    access_token: str
    token_type: str
    expires_in: int


class GitHubUser(RawPayload):
    id: str
    login: str = ""
    name: str | None = None
    html_url: str | None = None
    avatar_url: str | None = None


class GitHubProvider(OAuthProvider[GitHubToken, GitHubUser]):
    """GitHub login."""

    provider_type = AuthProviderType.GITHUB
    authorize_endpoint = "https://github.com/login/oauth/authorize"
    token_endpoint = "https://github.com/login/oauth/access_token"
    profile_endpoint = "https://api.github.com/user"
    token_model = GitHubToken
    profile_model = GitHubUser

    authorize_params = {"scope": "read:user"}
    token_headers = {"Accept": "application/json"}

    def parse_token(self, response: httpx.Response) -> GitHubToken:
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict) and payload.get("error"):
            raise MalformedResponse(
                provider=self.provider_id, step="token", detail=str(payload["error"])
            )
        token = super().parse_token(response)
        if token.token_type.lower() != "bearer":
            raise MalformedResponse(
                provider=self.provider_id,
                step="token",
                detail=f"unsupported token_type {token.token_type}",
            )
        return token

    async def request_profile(self, token: GitHubToken) -> httpx.Response:
        return await self.transport.get(
            self.profile_endpoint,
            headers={
                "Authorization": f"Bearer {token.access_token}",
                "Accept": "application/vnd.github+json",
            },
            provider=self.provider_id,
            step="profile",
        )

    def normalize(self, token: GitHubToken, profile: GitHubUser) -> AuthenticationResult:
        if profile.login:
            profile_url = f"{GITHUB_PROFILE_BASE}{profile.login}"
        else:
            profile_url = first_present(profile.html_url, f"{GITHUB_PROFILE_BASE}{profile.id}")
        return AuthenticationResult(
            provider=self.provider_type,
            authentication_id=profile.id,
            access_token=token.access_token,
            expires_in=timedelta(seconds=token.expires_in),
            display_name=first_present(profile.name, profile.login),
            profile_url=profile_url,
            image_url=first_present(profile.avatar_url),
        )
