"""Application configuration."""

from functools import lru_cache

from pydantic import BaseModel
from pydantic_settings import BaseSettings

from clinical_literature.constants import (
    DEFAULT_MAX_RESULTS,
    DEFAULT_TIMEOUT,
    DEFAULT_TOOL,
    NCBI_BASE_URL,
    PMC_IDCONV_URL,
)


class PubMedConfig(BaseModel):
    """Static configuration for a PubMedClient.

    ``tool`` and ``email`` are required by the NCBI E-utilities usage policy.
    ``api_key`` is passed through untouched; it only raises the upstream
    rate limit (3/sec to 10/sec).
    """

    base_url: str = NCBI_BASE_URL
    idconv_url: str = PMC_IDCONV_URL
    api_key: str | None = None
    default_max_results: int = DEFAULT_MAX_RESULTS
    timeout_seconds: float = DEFAULT_TIMEOUT
    tool: str = DEFAULT_TOOL
    email: str

    model_config = {"frozen": True}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # NCBI
    ncbi_api_key: str = ""
    pubmed_contact_email: str
    pubmed_tool: str = DEFAULT_TOOL
    pubmed_timeout_seconds: float = DEFAULT_TIMEOUT
    pubmed_default_max_results: int = DEFAULT_MAX_RESULTS

    # App Settings
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        frozen = True

    def pubmed_config(self) -> PubMedConfig:
        """Build the explicit client configuration from these settings."""
        return PubMedConfig(
            api_key=self.ncbi_api_key or None,
            default_max_results=self.pubmed_default_max_results,
            timeout_seconds=self.pubmed_timeout_seconds,
            tool=self.pubmed_tool,
            email=self.pubmed_contact_email,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
