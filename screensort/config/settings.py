from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    cache_backend: str = "file"
    cache_dir: str = ".screensort"
    cache_namespace: str = "ScreenSort"
    debug_snapshots: bool = False

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "screensort"
    db_username: str = "screensort"
    db_password: str = "secret"

    library_root: str = "screenshots"
    destination_prefix: str = "ScreenSort"
    caption_prefix: str = "ScreenSort"
    playlist_name: str = "ScreenSort"
    destination_workers: int = 4

    llm_provider: str = "openai"
    llm_api_key: str = ""
    llm_model_name: str = "gpt-4o-mini"
    llm_base_url: str = ""
    llm_timeout_seconds: int = 30
    llm_temperature: float = 0.0

    classifier_min_confidence: float = 0.6
    music_confidence_threshold: float = 0.6
    movie_confidence_threshold: float = 0.6
    book_confidence_threshold: float = 0.6
    fallback_confidence: float = 0.6

    transcription_provider: str = "openai_vision"
    transcription_model_name: str = "gpt-4o-mini"

    youtube_api_key: str = ""
    google_access_token: str = ""
    tmdb_api_key: str = ""
    lookup_timeout_seconds: int = 15

    content_log_path: str = "screensort-log.md"
