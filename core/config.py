from pydantic_settings import BaseSettings
from functools import lru_cache
from pathlib import Path


class Settings(BaseSettings):
    # App
    APP_NAME: str = "Postboard API"
    APP_VERSION: str = "1.0.0"
    APP_DESCRIPTION: str = """
    Event posting API for campus clubs and students.

    ## Features
    * Cookie based authentication
    * Post creation, editing and deletion by their owners
    * Upvoting and reporting posts
    * Browsing posts and their comments

    ## Rate Limits
    * Posts: 5 posts per minute
    * Votes: 20 votes per minute
    """
    DOCS_URL: str = "/docs"
    REDOC_URL: str = "/redoc"
    OPENAPI_URL: str = "/openapi.json"
    OPENAPI_TAGS: list[dict] = [
        {
            "name": "auth",
            "description": "Registration, login and logout"
        },
        {
            "name": "users",
            "description": "Current user profile"
        },
        {
            "name": "posts",
            "description": "Post creation, retrieval, voting and management operations"
        },
        {
            "name": "comments",
            "description": "Read access to the comments on posts"
        },
    ]

    # CORS
    CORS_ALLOWED_ORIGINS: list[str] = ["http://localhost:3000", "http://localhost"]

    # Database
    DB_USER: str = "postgres"
    DB_PASS: str = "postgres"
    DB_NAME: str = "postboard"
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_ECHO: bool = False
    # Full SQLAlchemy URL, takes precedence over the DB_* parts when set
    DATABASE_URI: str | None = None

    @property
    def DATABASE_URL(self) -> str:
        if self.DATABASE_URI:
            return self.DATABASE_URI
        return f"postgresql://{self.DB_USER}:{self.DB_PASS}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    # JWT
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # Redis
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0

    @property
    def REDIS_URL(self) -> str:
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    # Pagination
    MAX_PAGE_SIZE: int = 50
    DEFAULT_PAGE_SIZE: int = 20

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    POSTS_PER_MINUTE: int = 5
    VOTES_PER_MINUTE: int = 20

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "console"  # or "json"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    # Get the current file's directory
    current_dir = Path(__file__).resolve().parent
    # Go up one level to the project root
    root_dir = current_dir.parent

    # Initialize settings with explicit .env path
    return Settings(_env_file=root_dir / ".env")
