"""
Weibo OAuth2 provider.

Token response carries the user id (``uid``); the profile lookup is keyed by it.
"""

from datetime import timedelta

import httpx

from .base import AuthenticationResult, AuthProviderType, OAuthProvider, RawPayload, first_present

WEIBO_PROFILE_BASE = "https://weibo.com/"


class WeiboToken(RawPayload):
    access_token: str
    expires_in: int
    uid: str


class WeiboUser(RawPayload):
    screen_name: str | None = None
    domain: str | None = None  # Personalized URL alias, empty when unset
    idstr: str | None = None
    profile_image_url: str | None = None


class WeiboProvider(OAuthProvider[WeiboToken, WeiboUser]):
    """Sina Weibo login."""

    provider_type = AuthProviderType.WEIBO
    authorize_endpoint = "https://api.weibo.com/oauth2/authorize"
    token_endpoint = "https://api.weibo.com/oauth2/access_token"
    profile_endpoint = "https://api.weibo.com/2/users/show.json"
    token_model = WeiboToken
    profile_model = WeiboUser

    async def request_profile(self, token: WeiboToken) -> httpx.Response:
        return await self.transport.get(
            self.profile_endpoint,
            params={"uid": token.uid},
            headers={"Authorization": f"OAuth2 {token.access_token}"},
            provider=self.provider_id,
            step="profile",
        )

    def normalize(self, token: WeiboToken, profile: WeiboUser) -> AuthenticationResult:
        # Prefer the personalized domain, fall back to the numeric id string.
        # A blank domain counts as absent (Weibo sends "" when no alias is set),
        # and the token uid stands in when the profile also omits idstr.
        alias = first_present(profile.domain, profile.idstr, token.uid)
        return AuthenticationResult(
            provider=self.provider_type,
            authentication_id=token.uid,
            access_token=token.access_token,
            expires_in=timedelta(seconds=token.expires_in),
            display_name=first_present(profile.screen_name),
            profile_url=f"{WEIBO_PROFILE_BASE}{alias}",
            image_url=first_present(profile.profile_image_url),
        )
