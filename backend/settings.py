import os

# Basic settings helper to read environment configuration.

DEFAULT_NOMINATIM_BASE_URL = "https://nominatim.openstreetmap.org"
DEFAULT_OSM_VIEWER_URL = "https://www.openstreetmap.org/"
FALLBACK_USER_AGENT = "road-finder/0.1 (contact: example@example.com)"


def _as_float(val: str | None, default: float) -> float:
    if val is None or not val.strip():
        return default
    try:
        return float(val)
    except ValueError:
        return default


class Settings:
    def __init__(self) -> None:
        self.NOMINATIM_BASE_URL: str = (
            os.getenv("NOMINATIM_BASE_URL") or DEFAULT_NOMINATIM_BASE_URL
        ).rstrip("/")
        self.NOMINATIM_USER_AGENT: str | None = os.getenv("NOMINATIM_USER_AGENT")
        self.NOMINATIM_REFERER: str | None = os.getenv("NOMINATIM_REFERER")
        self.NOMINATIM_MIN_INTERVAL: float = _as_float(os.getenv("NOMINATIM_MIN_INTERVAL"), 1.1)
        self.NOMINATIM_TIMEOUT_SECONDS: float = _as_float(os.getenv("NOMINATIM_TIMEOUT_SECONDS"), 10.0)
        self.OSM_VIEWER_URL: str = os.getenv("OSM_VIEWER_URL") or DEFAULT_OSM_VIEWER_URL


settings = Settings()
