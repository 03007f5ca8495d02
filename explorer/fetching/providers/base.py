"""
Base provider contract for paper searching.

All providers must implement this contract:
- Accept a SearchRequest built by the QueryBuilder
- Issue the identifier search, then one batch detail fetch for those identifiers
- Return a SearchOutcome with the provider's total count and the parsed Papers

Providers never retry and never return partial results: the first failure
aborts the search with a PaperProviderError subclass.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from explorer.core.paper import Paper
from explorer.fetching.query_builder import SearchRequest

logger = logging.getLogger(__name__)


class ProviderConfig:
    """Global configuration for all providers."""

    def __init__(self):
        from explorer.config.system_settings import system_settings

        self.base_url = system_settings.EUTILS_BASE_URL.rstrip("/")
        self.timeout = system_settings.FETCH_TIMEOUT_SECONDS
        self.api_key = system_settings.NCBI_API_KEY
        self.tool = system_settings.NCBI_TOOL
        self.email = system_settings.NCBI_EMAIL

        logger.debug(f"ProviderConfig initialized: base_url={self.base_url}, timeout={self.timeout}s")

    def credential_params(self) -> Dict[str, str]:
        """Extra query parameters identifying this client to the provider."""
        params = {}
        if self.api_key:
            params["api_key"] = self.api_key
        if self.tool:
            params["tool"] = self.tool
        if self.email:
            params["email"] = self.email
        return params


@dataclass
class SearchOutcome:
    """Result of a successful search: provider-reported total and the parsed records."""
    total_count: int
    papers: List[Paper] = field(default_factory=list)


class PaperProvider(ABC):
    """
    Abstract base class for paper providers.

    All providers must:
    1. Accept a SearchRequest
    2. Run the identifier search and the detail fetch sequentially
    3. Raise NoResultsError when the identifier search is empty
    4. Raise FetchError on any network, status or payload failure
    """

    def __init__(self, config: Optional[ProviderConfig] = None):
        self.config = config or ProviderConfig()
        self.name = self.__class__.__name__.replace("Provider", "").lower()

    @abstractmethod
    def search(self, request: SearchRequest) -> SearchOutcome:
        """
        Search this provider.

        Args:
            request: Search request from the QueryBuilder.

        Returns:
            SearchOutcome with total_count and Papers in provider order.

        Raises:
            NoResultsError: The identifier search returned no identifiers.
            FetchError: Either call failed.
        """
        pass


class PaperProviderError(Exception):
    """Exception raised by provider during search."""
    user_message = "Something went wrong. Please try again."


class NoResultsError(PaperProviderError):
    """The identifier search matched nothing."""
    user_message = "No research papers found. Try different keywords."


class FetchError(PaperProviderError):
    """A provider call failed or returned an unusable payload."""
    user_message = "Failed to fetch research papers. Please try again."
