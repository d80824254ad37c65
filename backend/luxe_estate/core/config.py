from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Ignore unknown env vars so a shared .env can carry frontend-only values.
    model_config = SettingsConfigDict(env_file=(".env", "../.env"), case_sensitive=True, extra="ignore")

    PROJECT_NAME: str = "LuxeEstate"
    ENVIRONMENT: str = "development"
    API_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"

    JWT_ACCESS_SECRET: str = "change_me_access"
    JWT_REFRESH_SECRET: str = "change_me_refresh"
    JWT_ALGORITHM: str = "HS256"
    JWT_ISSUER: str = "luxe-estate"
    JWT_AUDIENCE: str = "luxe-estate-api"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7
    REFRESH_COOKIE_NAME: str = "jwt"

    DATABASE_URL: str = ""
    POSTGRES_SERVER: str = "db"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "luxe_estate"

    CELERY_BROKER_URL: str = "redis://redis:6379/1"
    CELERY_RESULT_BACKEND: str = "redis://redis:6379/2"
    CELERY_TASK_ALWAYS_EAGER: bool = False

    CLIENT_URL: str = "http://localhost:5173"
    BACKEND_CORS_ORIGINS: list[str] = Field(default_factory=lambda: ["http://localhost:5173"])

    ENABLE_API_DOCS: bool = True
    RATE_LIMIT_ENABLED: bool = True

    GOOGLE_CLIENT_ID: str = ""

    SMTP_HOST: str = ""
    SMTP_PORT: int = 587
    SMTP_USERNAME: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_FROM_EMAIL: str = "no-reply@luxe-estate.local"
    SMTP_FROM_NAME: str = "LuxeEstate"
    SMTP_USE_TLS: bool = True
    # Where contact-form submissions are forwarded; falls back to the sender address.
    CONTACT_NOTIFICATION_EMAIL: str = ""

    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_API_KEY: str = ""
    CLOUDINARY_API_SECRET: str = ""
    CLOUDINARY_FOLDER: str = "real-estate-properties"
    PLACEHOLDER_IMAGE_URL: str = "https://images.pexels.com/photos/106399/pexels-photo-106399.jpeg"

    INITIAL_ADMIN_EMAIL: str = ""
    INITIAL_ADMIN_PASSWORD: str = ""

    @model_validator(mode="after")
    def _prod_guards(self):
        if self.ENVIRONMENT.lower() == "production":
            if self.ENABLE_API_DOCS:
                raise ValueError("ENABLE_API_DOCS must be false in production")
            for name in ("JWT_ACCESS_SECRET", "JWT_REFRESH_SECRET"):
                value = getattr(self, name)
                if not value or len(value) < 32:
                    raise ValueError(f"{name} must be 32+ chars in production")
            if self.JWT_ACCESS_SECRET == self.JWT_REFRESH_SECRET:
                raise ValueError("Access and refresh secrets must differ in production")
        return self

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    @property
    def cloudinary_configured(self) -> bool:
        return bool(self.CLOUDINARY_CLOUD_NAME and self.CLOUDINARY_API_KEY and self.CLOUDINARY_API_SECRET)


@lru_cache
def get_settings() -> Settings:
    return Settings()
