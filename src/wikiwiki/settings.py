from __future__ import annotations

from pydantic import Field

try:
    from pydantic_settings import BaseSettings, SettingsConfigDict
except Exception as e:  # pragma: no cover
    raise RuntimeError(
        "pydantic-settings is required. Install with: pip install pydantic-settings"
    ) from e


class WikiwikiSettings(BaseSettings):
    """Unified configuration for wikiwiki.

    Environment variables are prefixed with WIKIWIKI_.
    """

    model_config = SettingsConfigDict(env_prefix="WIKIWIKI_", extra="ignore")

    # --- Core ---
    log_level: str = Field(default="INFO", description="Python logging level")
    language: str | None = Field(
        default=None, description="Wikipedia language code; defaults to the environment locale"
    )
    user_agent: str = Field(default="WikiWiki/0.1.0 (educational)")

    # --- Resolution ---
    search_limit: int = Field(default=10, description="opensearch candidates per query")
    article_link_limit: int = Field(default=50, description="outbound article links kept for the graph")

    # --- Providers ---
    musicbrainz_min_interval: float = Field(default=1.0, description="seconds between MusicBrainz calls")
    nominatim_min_interval: float = Field(default=1.0, description="seconds between Nominatim calls")
    tmdb_api_key: str | None = Field(default=None, description="If unset, TMDB enrichment is skipped")
    commons_thumb_width: int = 800

    # --- Graph ---
    batch_chunk_size: int = 5
    batch_pause: float = 1.0

    # --- HTTP surface ---
    bind_host: str = "127.0.0.1"
    bind_port: int = 8090


settings = WikiwikiSettings()
