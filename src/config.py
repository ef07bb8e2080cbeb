from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "Marché Local"
    debug: bool = False
    log_level: str = "INFO"

    api_base_url: str = "http://localhost:8000"
    producers_path: str = "/api/public/producers/"
    producer_detail_path: str = "/api/public/producers/{producer_id}/"
    blog_posts_path: str = "/api/blog/posts/"
    http_timeout: float = 10.0

    catalog_page_size: int = 12
    evaluations_page_size: int = 10
    search_debounce_ms: int = 250

    streamlit_port: int = 8501


settings = Settings()
