from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "FS Booking Api Project"
    API_PREFIX: str = "/api"

    # Server
    PORT: int = 8000
    ENVIRONMENT: str = "development"

    # MongoDB (database name comes from the URL path)
    MONGODB_URL: str = "mongodb://127.0.0.1:27017/FASBookings"
    BOOKINGS_COLLECTION: str = "Bookings"

    # Logging
    LOG_LEVEL: str = "INFO"
    ERROR_LOG_PATH: str = "logs/errors.log"

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
