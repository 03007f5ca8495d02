"""
SearchService: runs one search through a SearchSession.
"""
import logging
from typing import Optional

from explorer.config.search_policy import SearchPolicy, search_policy
from explorer.fetching.providers import PROVIDER_REGISTRY
from explorer.fetching.providers.base import FetchError, NoResultsError, PaperProvider
from explorer.fetching.query_builder import build_search_request
from explorer.fetching.session import Failed, NoResults, SearchSession, SearchState, Success

logger = logging.getLogger(__name__)


class SearchService:
    """
    Composes QueryBuilder -> provider -> RecordParser and records the outcome
    on the caller's session.
    """

    def __init__(
        self,
        provider: Optional[PaperProvider] = None,
        policy: Optional[SearchPolicy] = None,
    ):
        self.policy = policy or search_policy
        self.provider = provider or PROVIDER_REGISTRY[self.policy.database]()
        logger.info(f"SearchService initialized with provider '{self.provider.name}'")

    def search(
        self,
        session: SearchSession,
        query: str,
        max_results: int,
        sort: str,
    ) -> SearchState:
        """
        Execute a search and apply its result to the session.

        Args:
            session: Session whose state is updated.
            query: Free text from the user.
            max_results: Page size.
            sort: Provider sort key.

        Returns:
            The session state after the search. Unchanged for an empty query,
            and unchanged if a newer search was started meanwhile.
        """
        request = build_search_request(query, max_results, sort, self.policy)
        if request is None:
            return session.state

        token = session.begin(request)
        logger.info(f"SearchService: search #{token} for '{query}' (max_results={max_results}, sort={sort})")

        try:
            outcome = self.provider.search(request)
        except NoResultsError as e:
            session.resolve(token, NoResults(e.user_message))
            return session.state
        except FetchError as e:
            logger.error(f"SearchService: search #{token} failed: {e}", exc_info=True)
            session.resolve(token, Failed(e.user_message))
            return session.state

        session.resolve(token, Success(total_count=outcome.total_count, papers=outcome.papers))
        return session.state


_search_service: Optional[SearchService] = None


def get_search_service() -> SearchService:
    """Return the process-wide SearchService, creating it on first use."""
    global _search_service
    if _search_service is None:
        _search_service = SearchService()
    return _search_service
