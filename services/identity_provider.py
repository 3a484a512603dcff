import logging
import requests
from authlib.common.errors import AuthlibBaseError
from authlib.integrations.flask_client import OAuth
from dataclasses import dataclass

from utils.errors import AuthenticationError

logger = logging.getLogger(__name__)

GOOGLE_DISCOVERY_URL = "https://accounts.google.com/.well-known/openid-configuration"


@dataclass(frozen=True)
class ProviderProfile:
    provider_id: str
    display_name: str
    email: str


class GoogleIdentityProvider:
    """
    Google OAuth2 / OpenID Connect through Authlib's Flask client.
    The authorization-code exchange itself is Authlib's job.
    """

    def __init__(self, app, settings):
        self.oauth = OAuth(app)
        self.client = self.oauth.register(
            name="google",
            client_id=settings.google_client_id,
            client_secret=settings.google_client_secret,
            server_metadata_url=GOOGLE_DISCOVERY_URL,
            client_kwargs={"scope": "openid email profile"},
        )

    def authorize_redirect(self, redirect_uri):
        return self.client.authorize_redirect(redirect_uri)

    def fetch_profile(self) -> ProviderProfile:
        try:
            token = self.client.authorize_access_token()
            userinfo = token.get("userinfo") or self.client.userinfo(token=token)
        except (AuthlibBaseError, requests.exceptions.RequestException) as e:
            logger.error(f"Google token exchange failed: {e}")
            raise AuthenticationError("Google sign-in failed. Please try again.")

        return profile_from_userinfo(userinfo)


def profile_from_userinfo(userinfo) -> ProviderProfile:
    provider_id = userinfo.get("sub")
    email = userinfo.get("email")
    if not provider_id or not email:
        raise AuthenticationError("Google did not return an account id and email.")
    return ProviderProfile(
        provider_id=str(provider_id),
        display_name=userinfo.get("name") or email,
        email=email,
    )
