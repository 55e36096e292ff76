from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl
from pydantic_settings import BaseSettings

from .errors import ConfigurationError

DEFAULT_USER_AGENT = "cv-site-portfolio-api"


class Settings(BaseSettings):
    github_token: Optional[str] = Field(default=None, alias="GITHUB_TOKEN")
    github_base_url: HttpUrl = Field(
        default="https://api.github.com", alias="GITHUB_BASE_URL"
    )
    github_proxy: Optional[str] = Field(default=None, alias="GITHUB_PROXY")
    github_timeout_seconds: float = Field(default=20, alias="GITHUB_TIMEOUT_SECONDS")
    portfolio_username: str = Field(default="TehilaTheStudent", alias="PORTFOLIO_USERNAME")
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8080, alias="PORT")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        # the deploy environment carries plenty of keys this app never reads
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()


def require_token(settings: Settings) -> str:
    """Return the GitHub token or fail startup when it is missing."""
    token = (settings.github_token or "").strip()
    if not token:
        raise ConfigurationError("GITHUB_TOKEN is not set")
    return token


class ClientConfig(BaseModel):
    """Read-only settings handed to GitHubClient; no token means unauthenticated mode."""

    model_config = ConfigDict(frozen=True)

    token: Optional[str] = None
    base_url: str = "https://api.github.com"
    timeout: float = 20
    proxy: Optional[str] = None
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_settings(cls, settings: Settings) -> "ClientConfig":
        return cls(
            token=require_token(settings),
            # HttpUrl renders with a trailing slash, endpoints carry their own
            base_url=str(settings.github_base_url).rstrip("/"),
            timeout=settings.github_timeout_seconds,
            proxy=settings.github_proxy,
        )
