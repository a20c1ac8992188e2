"""Application configuration via pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App
    debug: bool = False
    allowed_origins: list[str] = ["*"]
    webhook_rate_limit: str = "120/minute"

    # Upstash Redis (REST)
    upstash_redis_rest_url: str = ""
    upstash_redis_rest_token: str = ""
    store_timeout: float = 10.0
    donation_queue_key: str = "donations"
    leaderboard_key: str = "saweria_leaderboard"

    # BagiBagi webhook signing secret; empty disables signature verification
    bagibagi_webhook_token: str = ""

    @property
    def store_configured(self) -> bool:
        return bool(self.upstash_redis_rest_url)

    @property
    def bagibagi_verification_enabled(self) -> bool:
        return bool(self.bagibagi_webhook_token)


settings = Settings()
