from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "postgresql+asyncpg://localhost:5432/pillars"
    default_tz: str = "UTC"
    engine_api_key: str | None = None
    log_level: str = "INFO"

    # Slate shape
    max_slate_size: int = 8  # 4 pillars x per_pillar_cap
    per_pillar_cap: int = 2  # one lesson/challenge + one tool/habit

    # Cross-pillar scoring
    stale_pillar_days: int = 3  # No completed lesson for this many days -> boost
    stale_pillar_boost: int = 1  # Added to every candidate of a stale pillar

    # Callers wrap the pipeline in this timeout; a timed-out run stores nothing
    generation_timeout_seconds: float = 10.0

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
