from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    debug: bool = False

    # GitHub - optional token, only used to raise the REST API rate limit
    github_token: str = ""
    # Seconds to keep sha-addressed files and listings in memory
    github_cache_ttl: int = 3600

    # Site served at "/" (empty = only /github-site/... is available)
    site_owner: str = ""
    site_repo: str = ""

    # Hosts that reverse-proxy /github-site/<owner>/<repo>/ at their own root.
    # Requests arriving with one of these Host headers get root-relative links.
    proxied_hosts: list[str] = []

    # Directory listings
    # Rendering every post of a big directory is CPU-heavy; entries past the limit are dropped
    listing_limit: int = 500
    listing_concurrency: int = 10
    # "index": dated title links, "articles": every post rendered in full
    listing_style: Literal["index", "articles"] = "index"

    # Owner login -> author display name, shown as a byline under article titles
    bylines: dict[str, str] = {}

    @property
    def site_configured(self) -> bool:
        """Check if a repository is configured for the root site."""
        return bool(self.site_owner and self.site_repo)


settings = Settings()
