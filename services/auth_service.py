import logging
from pydantic import ValidationError

from services.identity_provider import ProviderProfile
from services.user_crud_service import UserRepository
from utils.errors import MarketMapperError
from utils.result import Err, Ok, Result

logger = logging.getLogger(__name__)


def find_or_create_user(users: UserRepository, profile: ProviderProfile) -> Result[dict]:
    """Look up the user for a provider profile, creating it on first login."""
    try:
        user, created = users.find_or_create(
            google_id=profile.provider_id,
            name=profile.display_name,
            email=profile.email,
        )
    except ValidationError as e:
        logger.error(f"Provider profile failed validation: {e.errors()}")
        return Err("Your Google account did not provide a usable profile.")
    except MarketMapperError as e:
        logger.error(f"User lookup failed: {e.message}")
        return Err("Could not sign you in right now. Please try again.")

    if created:
        logger.info(f"Created user for provider id {profile.provider_id}")
    return Ok(user)
