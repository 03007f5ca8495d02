"""
QueryBuilder: turn form input into a PubMed identifier-search request.

The user's text is conjoined with the drug-development filter from the
search policy. Page size and sort order pass through untouched.
"""
import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

from explorer.config.search_policy import SearchPolicy, search_policy

logger = logging.getLogger(__name__)

# Characters left unescaped by JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


@dataclass(frozen=True)
class SearchRequest:
    """One identifier-search request against the provider."""
    query: str
    term: str
    max_results: int
    sort: str
    database: str = "pubmed"

    @property
    def encoded_term(self) -> str:
        return encode_uri_component(self.term)

    def to_query_string(self) -> str:
        """Query string for esearch, with the term already encoded."""
        return (
            f"db={self.database}&term={self.encoded_term}"
            f"&retmax={self.max_results}&retmode=json&sort={self.sort}"
        )


def build_search_request(
    query: str,
    max_results: int,
    sort: str,
    policy: Optional[SearchPolicy] = None,
) -> Optional[SearchRequest]:
    """
    Build a search request from user input.

    Args:
        query: Free text as typed by the user.
        max_results: Selected page size.
        sort: Selected sort key ('relevance' or 'pub_date').
        policy: Search policy supplying the domain filter (defaults to the singleton).

    Returns:
        SearchRequest, or None when the query is empty or whitespace-only.
    """
    if not query or not query.strip():
        logger.debug("QueryBuilder: empty query, no request built")
        return None

    policy = policy or search_policy
    term = f"{query} AND {policy.domain_filter}"
    return SearchRequest(
        query=query,
        term=term,
        max_results=max_results,
        sort=sort,
        database=policy.database,
    )
