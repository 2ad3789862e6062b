"""Configuration settings for the MSP acquisition screener."""

from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Paths
    base_dir: Path = Path(__file__).parent.parent
    data_dir: Path = base_dir / "data"
    db_path: Path = data_dir / "geocode_cache.db"

    # HTTP Client Settings
    user_agent: str = "MSPScreener/1.0 (+contact@example.com)"
    connect_timeout: float = 10.0
    read_timeout: float = 30.0

    # Geocoding
    geocoder_url: str = "https://nominatim.openstreetmap.org/search"
    geocoder_country_codes: str = "gb"
    geocode_rate_limit_delay: float = 1.0  # Nominatim allows 1 request/second
    geocode_cache_days: int = 90

    # Reference point for location scoring (Central London)
    reference_latitude: float = 51.5074
    reference_longitude: float = -0.1278

    @property
    def database_url(self) -> str:
        return f"sqlite:///{self.db_path}"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "SCREENER_"


settings = Settings()
