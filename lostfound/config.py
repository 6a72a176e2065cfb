from __future__ import annotations

import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


def _env(name: str, default: str = "") -> str:
    val = os.getenv(name, default)
    return val.strip() if isinstance(val, str) else default


@dataclass(frozen=True)
class Settings:
    site_url: str = _env("SITE_URL", "https://lostrefound.blogspot.com")
    timezone: str = _env("TIMEZONE", "Europe/Helsinki")

    # Service account JSON for firebase-admin, passed in as a single string
    firebase_service_account_json: str = _env("FIREBASE_SERVICE_ACCOUNT_JSON", "")

    # Supabase project URL, used to build public image URLs
    supabase_url: str = _env("SUPABASE_URL", "")

    # Placeholders; CI is expected to set both
    build_id: str = _env("BUILD_TIMESTAMP", "local") or "local"
    github_username: str = _env("GITHUB_USERNAME", "yourusername") or "yourusername"

    output_dir: str = _env("OUTPUT_DIR", "")
    log_level: str = _env("LOG_LEVEL", "INFO").upper() or "INFO"


settings = Settings()
