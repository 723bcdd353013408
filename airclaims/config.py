from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Redis (Celery broker / result backend)
    REDIS_URL: str = "redis://redis:6379/0"

    # Carrier & regulator
    CARRIER_CODE: str = "SV"
    REGULATOR_NAME: str = "GACA"
    JURISDICTION_AIRPORTS: str = "RUH,JED,DMM,AHB,TIF,MED,GIZ,AQI"

    # Reservation system (booking lookup)
    BOOKING_API_URL: str = "https://reservations.example.com/api/v1"
    BOOKING_API_KEY: str = "mock_booking_key"
    BOOKING_TIMEOUT_SECONDS: float = 10.0

    # Identity verification agent
    IDENTITY_API_URL: str = "https://api.everworker.ai/v1/agents/consumer-identity-validator"
    IDENTITY_API_KEY: str = "mock_identity_key"
    IDENTITY_TIMEOUT_SECONDS: float = 15.0

    # App
    APP_ENV: str = "development"
    ALLOWED_ORIGINS: str = "*"
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}

    @property
    def jurisdiction_airports(self) -> frozenset[str]:
        return frozenset(
            code.strip().upper() for code in self.JURISDICTION_AIRPORTS.split(",") if code.strip()
        )


settings = Settings()
