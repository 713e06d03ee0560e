# townhub/core/config.py
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = "Town Hub Classroom Economy"

    # Database
    # Railway exposes DATABASE_PUBLIC_URL for external access, DATABASE_URL internally
    DATABASE_URL: str | None = None
    DATABASE_PUBLIC_URL: str | None = None
    # Legacy SQLite deployment
    DB_PATH: str = "./gameoflife.db"

    NODE_ENV: str = "development"
    PORT: int = 5000
    LOG_LEVEL: str = "INFO"

    # JWT Authentication
    SECRET_KEY: str = Field(
        default="your-secret-key-change-in-production",
        validation_alias=AliasChoices("JWT_SECRET", "SECRET_KEY"),
    )
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24  # 24 hours

    # Front end
    CLIENT_DIST_PATH: str = "client/dist"
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:3001",
        "http://127.0.0.1:3000",
    ]

    # Games
    WORDLE_WORDS_PATH: str | None = None

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def is_production(self) -> bool:
        return self.NODE_ENV == "production"

    @property
    def database_configured(self) -> bool:
        return bool(self.DATABASE_PUBLIC_URL or self.DATABASE_URL)

    @property
    def sqlalchemy_database_url(self) -> str:
        url = self.DATABASE_PUBLIC_URL or self.DATABASE_URL
        if not url:
            return f"sqlite:///{self.DB_PATH}"
        # SQLAlchemy no longer accepts the postgres:// alias
        if url.startswith("postgres://"):
            url = "postgresql://" + url[len("postgres://"):]
        return url


settings = Settings()
