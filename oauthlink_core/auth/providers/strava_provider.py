"""
Strava OAuth provider.

The token response embeds a summary athlete record; its id is the identity id.
"""

from datetime import timedelta

import httpx

from .base import AuthenticationResult, AuthProviderType, OAuthProvider, RawPayload, first_present

STRAVA_PROFILE_BASE = "https://www.strava.com/athletes/"


class StravaAthleteRef(RawPayload):
    id: str


class StravaToken(RawPayload):
    access_token: str
    expires_in: int
    athlete: StravaAthleteRef


class StravaAthlete(RawPayload):
    id: str
    username: str | None = None
    firstname: str | None = None
    lastname: str | None = None
    profile: str | None = None  # 124x124 avatar
    profile_medium: str | None = None  # 62x62 avatar


class StravaProvider(OAuthProvider[StravaToken, StravaAthlete]):
    """Strava login."""

    provider_type = AuthProviderType.STRAVA
    authorize_endpoint = "https://www.strava.com/oauth/authorize"
    token_endpoint = "https://www.strava.com/oauth/token"
    profile_endpoint = "https://www.strava.com/api/v3/athlete"
    token_model = StravaToken
    profile_model = StravaAthlete

    authorize_params = {"scope": "read", "approval_prompt": "auto"}

    async def request_profile(self, token: StravaToken) -> httpx.Response:
        return await self.transport.get(
            self.profile_endpoint,
            headers={"Authorization": f"Bearer {token.access_token}"},
            provider=self.provider_id,
            step="profile",
        )

    def normalize(self, token: StravaToken, profile: StravaAthlete) -> AuthenticationResult:
        full_name = " ".join(
            part.strip() for part in (profile.firstname, profile.lastname) if part and part.strip()
        )
        return AuthenticationResult(
            provider=self.provider_type,
            authentication_id=token.athlete.id,
            access_token=token.access_token,
            expires_in=timedelta(seconds=token.expires_in),
            display_name=first_present(full_name, profile.username),
            # Profile URLs are keyed by athlete id only
            profile_url=f"{STRAVA_PROFILE_BASE}{token.athlete.id}",
            image_url=first_present(profile.profile, profile.profile_medium),
        )
