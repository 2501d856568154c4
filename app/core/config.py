from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    BUSINESS_NAME: str = "Christina's Home Salon"
    BUSINESS_EMAIL: str = "hello@christinashomesalon.co.uk"
    BUSINESS_PHONE: str = "07XXX XXXXXX"
    FROM_EMAIL: str = "bookings@christinashomesalon.co.uk"
    BUSINESS_TIMEZONE: str = "Europe/London"

    RESEND_API_KEY: str | None = None
    RESEND_API_URL: str = "https://api.resend.com/emails"
    NOTIFICATION_TIMEOUT_SECONDS: float = 10.0
    SEND_CUSTOMER_CONFIRMATION: bool = True

    RATE_LIMIT_MAX_REQUESTS: int = 3
    RATE_LIMIT_WINDOW_SECONDS: float = 60.0

    PRICING_CONFIG_PATH: str | None = None


settings = Settings()
