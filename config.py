from __future__ import annotations

from typing import Optional

from pydantic import Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings


class AppConfig(BaseSettings):
    """Application settings loaded from environment variables."""

    google_api_key: Optional[str] = Field(None, alias="GOOGLE_API_KEY")
    google_cx_id: Optional[str] = Field(None, alias="GOOGLE_CX_ID")
    google_search_url: HttpUrl = Field(
        "https://www.googleapis.com/customsearch/v1", alias="GOOGLE_SEARCH_URL"
    )
    duckduckgo_api_url: HttpUrl = Field(
        "https://api.duckduckgo.com/", alias="DUCKDUCKGO_API_URL"
    )
    gemini_api_key: Optional[str] = Field(None, alias="GEMINI_API_KEY")
    gemini_api_url: HttpUrl = Field(
        "https://generativelanguage.googleapis.com/v1beta/models/gemini-1.5-flash:generateContent",
        alias="GEMINI_API_URL",
    )
    request_timeout_seconds: int = Field(15, alias="REQUEST_TIMEOUT_SECONDS")
    search_user_agent: str = Field(
        "Mozilla/5.0 (compatible; InternshipRadar/0.1; +https://example.com/bot)",
        alias="SEARCH_USER_AGENT",
    )
    default_query: str = Field(
        "vagas estágio desenvolvimento software região sul Brasil",
        alias="DEFAULT_QUERY",
    )
    search_site_filter: str = Field(
        "site:linkedin.com/jobs OR site:gupy.io OR site:vagas.com.br OR site:indeed.com.br",
        alias="SEARCH_SITE_FILTER",
    )
    max_results: int = Field(12, alias="MAX_RESULTS")
    min_results: int = Field(5, alias="MIN_RESULTS")
    relevance_require_both: bool = Field(False, alias="RELEVANCE_REQUIRE_BOTH")
    static_dir: str = Field("public", alias="STATIC_DIR")
    http_host: str = Field("0.0.0.0", alias="HTTP_HOST")
    http_port: int = Field(3000, alias="HTTP_PORT")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True

    @field_validator("google_api_key", "google_cx_id", "gemini_api_key", mode="before")
    @classmethod
    def blank_key_is_missing(cls, value: Optional[str]) -> Optional[str]:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def google_search_enabled(self) -> bool:
        return bool(self.google_api_key and self.google_cx_id)
