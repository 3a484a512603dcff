import os
from dataclasses import dataclass
from dotenv import load_dotenv

from utils.errors import ConfigError

REQUIRED_KEYS = (
    "GOOGLE_CLIENT_ID",
    "GOOGLE_CLIENT_SECRET",
    "CLIENT_URL",
    "SECRET",
    "DATABASE_LINK",
    "GEMINI_API_KEY",
)

SESSION_BACKENDS = ("mongodb", "signed-cookie")


@dataclass(frozen=True)
class Settings:
    google_client_id: str
    google_client_secret: str
    client_url: str
    secret: str
    database_link: str
    gemini_api_key: str

    mongo_db_name: str = "marketmapper"
    gemini_model: str = "gemini-2.5-flash"
    gemini_temperature: float = 0.2

    overpass_url: str = "https://overpass-api.de/api/interpreter"
    overpass_rate_per_second: float = 1.0
    overpass_burst: int = 1
    overpass_timeout_seconds: float = 60.0
    search_radius_meters: int = 1000

    session_backend: str = "mongodb"
    session_lifetime_days: int = 7

    host: str = "0.0.0.0"
    port: int = 8080
    debug: bool = False

    @property
    def google_callback_url(self) -> str:
        return self.client_url.rstrip("/") + "/auth/google/callback"

    @classmethod
    def from_env(cls, environ=None, load_env_file: bool = True) -> "Settings":
        """
        Build settings from environment variables (after loading .env).
        Raises ConfigError naming every missing or malformed key.
        """
        if load_env_file:
            load_dotenv()
        env = os.environ if environ is None else environ

        missing = [key for key in REQUIRED_KEYS if not (env.get(key) or "").strip()]
        if missing:
            raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

        def _get(key, default):
            return (env.get(key) or "").strip() or default

        def _number(key, default, cast):
            raw = _get(key, None)
            if raw is None:
                return default
            try:
                return cast(raw)
            except ValueError:
                raise ConfigError(f"Invalid value for {key}: {raw!r}")

        session_backend = _get("SESSION_BACKEND", "mongodb").lower()
        if session_backend not in SESSION_BACKENDS:
            raise ConfigError(
                f"Invalid value for SESSION_BACKEND: {session_backend!r} "
                f"(expected one of {', '.join(SESSION_BACKENDS)})"
            )

        return cls(
            google_client_id=env["GOOGLE_CLIENT_ID"].strip(),
            google_client_secret=env["GOOGLE_CLIENT_SECRET"].strip(),
            client_url=env["CLIENT_URL"].strip(),
            secret=env["SECRET"].strip(),
            database_link=env["DATABASE_LINK"].strip(),
            gemini_api_key=env["GEMINI_API_KEY"].strip(),
            mongo_db_name=_get("MONGO_DB_NAME", "marketmapper"),
            gemini_model=_get("GEMINI_MODEL", "gemini-2.5-flash"),
            gemini_temperature=_number("GEMINI_TEMPERATURE", 0.2, float),
            overpass_url=_get("OVERPASS_URL", "https://overpass-api.de/api/interpreter"),
            overpass_rate_per_second=_number("OVERPASS_RATE_PER_SECOND", 1.0, float),
            overpass_burst=_number("OVERPASS_BURST", 1, int),
            overpass_timeout_seconds=_number("OVERPASS_TIMEOUT_SECONDS", 60.0, float),
            search_radius_meters=_number("SEARCH_RADIUS_METERS", 1000, int),
            session_backend=session_backend,
            session_lifetime_days=_number("SESSION_LIFETIME_DAYS", 7, int),
            host=_get("HOST", "0.0.0.0"),
            port=_number("PORT", 8080, int),
            debug=_get("FLASK_DEBUG", "false").lower() == "true",
        )
