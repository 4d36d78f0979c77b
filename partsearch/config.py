import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parent.parent
load_dotenv(ROOT_DIR / ".env")


def _as_bool(value: str, default: bool = False) -> bool:
    if value is None:
        return default
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    inventory_path: str = os.getenv("INVENTORY_PATH", str(ROOT_DIR / "data" / "INVENTARIO_ACTUAL.json"))
    search_threshold: float = float(os.getenv("SEARCH_THRESHOLD", os.getenv("FUSE_THRESHOLD", "0.3")))
    search_min_match_length: int = int(os.getenv("SEARCH_MIN_MATCH_LENGTH", "3"))
    search_distance: int = int(os.getenv("SEARCH_DISTANCE", "100"))
    search_ignore_location: bool = _as_bool(os.getenv("SEARCH_IGNORE_LOCATION", "0"))
    brand_weight: float = float(os.getenv("BRAND_WEIGHT", "0.6"))
    description_weight: float = float(os.getenv("DESCRIPTION_WEIGHT", "0.4"))
    default_search_limit: int = int(os.getenv("DEFAULT_SEARCH_LIMIT", "10"))
    max_search_limit: int = int(os.getenv("MAX_SEARCH_LIMIT", "100"))
    # Ranked candidates kept before a year filter, as a multiple of limit * page.
    year_filter_cap_factor: int = int(os.getenv("YEAR_FILTER_CAP_FACTOR", "10"))
    request_timeout_seconds: int = int(os.getenv("REQUEST_TIMEOUT_SECONDS", "12"))
    debug_log: bool = _as_bool(os.getenv("DEBUG_LOG", "0"))
    environment: str = os.getenv("APP_ENV", "production")
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")
    server_host: str = os.getenv("SERVER_HOST", "0.0.0.0")
    server_port: int = int(os.getenv("SERVER_PORT", "3000"))
    enable_ui: bool = _as_bool(os.getenv("ENABLE_UI", "0"))

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()
