from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    host: str = "127.0.0.1"
    port: int = 9000
    log_level: str = "INFO"
    log_json: bool = False
    gateway_url: str = "http://localhost:3000"
    request_timeout: float = 30.0
    default_region: str = "US"
    search_max_results: int = 50
    trending_max_results: int = 10

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "TUBEFINDER_", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
