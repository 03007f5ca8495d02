"""
PubMed paper provider.

Searches PubMed through the E-utilities API in two sequential calls:
1. esearch for PMIDs (JSON)
2. efetch for the full records of exactly those PMIDs (XML)
"""
import logging
import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Optional

import requests

from explorer.fetching.parser import parse_articles
from explorer.fetching.providers.base import (
    FetchError,
    NoResultsError,
    PaperProvider,
    ProviderConfig,
    SearchOutcome,
)
from explorer.fetching.query_builder import SearchRequest

logger = logging.getLogger(__name__)


class PubMedProvider(PaperProvider):
    """Paper provider for PubMed."""

    def __init__(self, config: Optional[ProviderConfig] = None):
        super().__init__(config)
        self.name = "pubmed"
        self.base_url = self.config.base_url

    def search(self, request: SearchRequest) -> SearchOutcome:
        """
        Run an identifier search followed by one batch detail fetch.

        Args:
            request: Search request with encoded term, page size and sort order.

        Returns:
            SearchOutcome with the total reported by esearch and parsed Papers.
        """
        search_data = self._search_ids(request)

        result = search_data.get("esearchresult") or {}
        if not isinstance(result, dict):
            logger.error(f"PubMedProvider esearch returned unexpected esearchresult: {result!r}")
            raise FetchError("Invalid esearch payload: esearchresult is not an object")
        pmids = result.get("idlist") or []
        if not isinstance(pmids, list):
            logger.error(f"PubMedProvider esearch returned unexpected idlist: {pmids!r}")
            raise FetchError("Invalid esearch payload: idlist is not a list")
        if not pmids:
            logger.info(f"PubMedProvider found 0 PMIDs for term: {request.term}")
            raise NoResultsError(f"No PMIDs for term: {request.term}")

        total_count = self._parse_count(result.get("count"))
        logger.info(f"PubMedProvider found {len(pmids)} PMIDs (total {total_count}) for term: {request.term}")

        raw_xml = self._fetch_details(pmids)
        try:
            papers = parse_articles(raw_xml)
        except (ET.ParseError, LookupError, ValueError) as e:
            # LookupError: unknown encoding declared in the XML prolog
            logger.error(f"PubMedProvider XML parse error: {e}")
            raise FetchError(f"Malformed efetch payload: {e}") from e

        logger.info(f"PubMedProvider parsed {len(papers)}/{len(pmids)} papers")
        return SearchOutcome(total_count=total_count, papers=papers)

    def _search_ids(self, request: SearchRequest) -> Dict[str, Any]:
        # The term is pre-encoded by the QueryBuilder, so the URL is built directly
        search_url = f"{self.base_url}/esearch.fcgi?{request.to_query_string()}"
        logger.debug(f"PubMedProvider searching: {search_url}")

        response = self._get(search_url, self.config.credential_params())
        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"PubMedProvider esearch returned invalid JSON: {e}")
            raise FetchError(f"Invalid esearch payload: {e}") from e

        if not isinstance(data, dict):
            logger.error(f"PubMedProvider esearch returned non-object JSON: {type(data).__name__}")
            raise FetchError("Invalid esearch payload: expected a JSON object")
        return data

    def _fetch_details(self, pmids: List[str]) -> bytes:
        fetch_url = f"{self.base_url}/efetch.fcgi"
        fetch_params = {
            "db": "pubmed",
            "id": ",".join(pmids),
            "retmode": "xml",
        }
        fetch_params.update(self.config.credential_params())
        logger.debug(f"PubMedProvider fetching details with params: {fetch_params}")

        response = self._get(fetch_url, fetch_params)
        return response.content

    def _get(self, url: str, params: Dict[str, Any]) -> requests.Response:
        try:
            response = requests.get(url, params=params or None, timeout=self.config.timeout)
            response.raise_for_status()
            return response
        except requests.RequestException as e:
            logger.error(f"PubMedProvider request failed: {e}")
            raise FetchError(str(e)) from e

    @staticmethod
    def _parse_count(value: Any) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return 0
