
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SystemSettings(BaseSettings):
    """
    Centralized system-level configuration.
    Reads from .env at startup. Immutable at runtime.
    """

    # PubMed E-utilities
    EUTILS_BASE_URL: str = Field("https://eutils.ncbi.nlm.nih.gov/entrez/eutils")
    PUBMED_ARTICLE_URL: str = Field("https://pubmed.ncbi.nlm.nih.gov")
    FETCH_TIMEOUT_SECONDS: int = Field(30)

    # Optional NCBI etiquette parameters, sent with every request when set
    NCBI_API_KEY: Optional[str] = Field(None)
    NCBI_TOOL: Optional[str] = Field(None)
    NCBI_EMAIL: Optional[str] = Field(None)

    LOG_LEVEL: str = Field("INFO")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

# Singleton instance
system_settings = SystemSettings()
