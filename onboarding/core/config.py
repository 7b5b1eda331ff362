# onboarding/core/config.py

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # --- Session Config ---
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    SESSION_EXPIRE_MINUTES: int = 60 * 24 * 7
    SESSION_COOKIE_NAME: str = "session_token"
    SESSION_COOKIE_SECURE: bool = False

    # --- Database Config ---
    DB_HOST: str
    DB_PORT: int
    DB_NAME: str
    DB_USER: str
    DB_PASS: str
    DB_POOL_MIN_SIZE: int = 5
    DB_POOL_MAX_SIZE: int = 20

    # --- Staff Accounts ---
    BANK_EMAIL_DOMAIN: str = "dashenbank.com"
    DEFAULT_PASSWORD_SUFFIX: str = "@12341234"

    # --- Customer Listing ---
    CUSTOMER_PAGE_SIZE: int = 100
    COMPANY_SEARCH_LIMIT: int = 50

    # --- Document Storage ---
    STORAGE_BACKEND: str = "local"
    STORAGE_BUCKET: str = "CBS"
    STORAGE_LOCAL_ROOT: str = "storage"
    STORAGE_PUBLIC_URL: str = ""
    S3_ENDPOINT: str = ""
    S3_REGION: str = ""
    S3_ACCESS_KEY_ID: str = ""
    S3_SECRET_ACCESS_KEY: str = ""
    UPLOAD_MAX_BYTES: int = 5 * 1024 * 1024

    LOG_LEVEL: str = "INFO"

    @property
    def database_url(self) -> str:
        return (
            f"postgresql+asyncpg://"
            f"{self.DB_USER}:{self.DB_PASS}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @property
    def asyncpg_url(self) -> str:
        return (
            f"postgresql://"
            f"{self.DB_USER}:{self.DB_PASS}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
