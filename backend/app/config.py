from pathlib import Path

from pydantic_settings import BaseSettings

# .env lookup: backend/.env -> repo root/.env
_backend_dir = Path(__file__).resolve().parent.parent
_env_candidates = [_backend_dir / ".env", _backend_dir.parent / ".env"]
_env_file = next((p for p in _env_candidates if p.exists()), ".env")


class Settings(BaseSettings):
    model_config = {"env_file": str(_env_file), "env_file_encoding": "utf-8", "extra": "ignore"}

    # Application
    app_env: str = "development"
    debug: bool = False

    # NewsData.io
    newsdata_api_key: str = ""
    newsdata_base_url: str = "https://newsdata.io/api/1/news"
    news_language: str = "en"
    news_page_size: int = 10
    news_categories: str = "business,technology"
    news_request_timeout_seconds: float = 15.0

    # Cache
    news_cache_ttl_seconds: int = 600
    news_coalesce_inflight: bool = True
    news_top_searches_limit: int = 10

    # Server
    host: str = "0.0.0.0"
    port: int = 8000


settings = Settings()
