from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Ingestion batching and retries
    batch_size: int = 5
    batch_delay_seconds: float = 1.0
    max_retries: int = 3
    retry_delay_seconds: float = 2.0

    # Recommendations
    top_n: int = 10

    # GeoNames
    geonames_base_url: str = "http://api.geonames.org"
    geonames_username: str = "demo"
    geonames_country: str = "IN"
    geonames_timeout_seconds: float = 5.0
    use_mock_geo: bool = False

    # Simulated external data source
    cache_ttl_seconds: int = 24 * 60 * 60
    simulated_delay_seconds: float = 0.0
    data_seed: Optional[int] = None

    # Logging
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}
