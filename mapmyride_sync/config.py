from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 11_1) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/87.0.4280.88 Safari/537.36"
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Value of the auth-token cookie from a logged-in mapmyride.com browser session
    auth_token: str = ""
    database_file: str = "data.db"
    mapmyride_base_url: str = "https://www.mapmyride.com"
    http_timeout_seconds: float = 30.0
    user_agent: str = DEFAULT_USER_AGENT
    # Default sync window starts this many days before the latest stored workout
    resync_overlap_days: int = Field(default=14, ge=0)
    debug: bool = False


def database_url_for(path: str) -> str:
    """SQLAlchemy async URL for a SQLite database file."""
    return f"sqlite+aiosqlite:///{path}"


settings = Settings()
