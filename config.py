# config.py
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


@dataclass(frozen=True)
class AppConfig:
    # Firestore. Without credentials the client falls back to application default credentials.
    firebase_credentials: Optional[str] = None
    firebase_project_id: Optional[str] = None
    # Run against the in-process store instead of Firestore (local dev, demos).
    use_memory_store: bool = False

    # AI agenda helper
    google_api_key: Optional[str] = None
    agenda_model: str = "gemini-2.5-pro"
    agenda_model_provider: str = "google_genai"

    # Form dates/times are interpreted in the ward's timezone.
    ward_timezone: str = "America/Los_Angeles"

    log_level: str = "INFO"
    recent_errors_limit: int = 50
    cors_origins: str = "*"


def _getenv(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name, default)
    if v is None:
        return None
    v = v.strip()
    return v if v else None


def _flag(name: str, default: str = "false") -> bool:
    return (_getenv(name, default) or default).lower() in ("1", "true", "yes")


def get_config() -> AppConfig:
    """
    The only place environment variables are read.
    Loads `.env` if present without overriding the real environment.
    """
    load_dotenv(override=False)

    return AppConfig(
        firebase_credentials=_getenv("FIREBASE_CREDENTIALS"),
        firebase_project_id=_getenv("FIREBASE_PROJECT_ID"),
        use_memory_store=_flag("USE_MEMORY_STORE"),
        google_api_key=_getenv("GOOGLE_API_KEY"),
        agenda_model=_getenv("AGENDA_MODEL", "gemini-2.5-pro") or "gemini-2.5-pro",
        agenda_model_provider=_getenv("AGENDA_MODEL_PROVIDER", "google_genai") or "google_genai",
        ward_timezone=_getenv("WARD_TIMEZONE", "America/Los_Angeles") or "America/Los_Angeles",
        log_level=(_getenv("LOG_LEVEL", "INFO") or "INFO").upper(),
        recent_errors_limit=int(_getenv("RECENT_ERRORS_LIMIT", "50") or "50"),
        cors_origins=_getenv("CORS_ORIGINS", "*") or "*",
    )
