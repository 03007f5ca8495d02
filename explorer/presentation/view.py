"""
Presentation: display formatting for search state.

Everything here is pure: it turns Papers and SearchState into strings and
plain dicts consumed by the page template and the JSON API.
"""

import logging
from typing import Any, Dict, List, Optional

from explorer.config.search_policy import SearchPolicy, search_policy
from explorer.config.system_settings import system_settings
from explorer.core.paper import Paper
from explorer.fetching.session import Failed, Idle, NoResults, SearchState, Success

logger = logging.getLogger(__name__)

IDLE_HINT = "Enter a search term above to find drug development research papers"


def format_authors(paper: Paper, policy: Optional[SearchPolicy] = None) -> str:
    """
    Authors line for a card.

    The et al. marker is appended whenever the displayed list is exactly at the
    cap, i.e. truncation is assumed rather than checked against author_count.
    """
    policy = policy or search_policy
    if not paper.authors:
        return ""
    line = ", ".join(paper.authors)
    if len(paper.authors) == policy.display.max_authors:
        line += policy.display.et_al_marker
    return line


def display_abstract(text: str, policy: Optional[SearchPolicy] = None) -> str:
    policy = policy or search_policy
    limit = policy.display.abstract_chars
    if len(text) > limit:
        return text[:limit] + policy.display.ellipsis
    return text


def result_stats(total_count: int, shown: int) -> str:
    return f"Found {total_count:,} research papers (showing {shown})"


def article_url(pmid: str) -> str:
    return f"{system_settings.PUBMED_ARTICLE_URL.rstrip('/')}/{pmid}/"


def meta_fields(paper: Paper) -> List[Dict[str, str]]:
    # DOI is listed only when the source provided one
    fields = [
        {"label": "Journal", "value": paper.journal},
        {"label": "Year", "value": paper.year},
        {"label": "PMID", "value": paper.pmid},
    ]
    if paper.doi:
        fields.append({"label": "DOI", "value": paper.doi})
    return fields


def paper_card(paper: Paper, policy: Optional[SearchPolicy] = None) -> Dict[str, Any]:
    """Display fields for one paper, shared by the page template and the JSON API."""
    policy = policy or search_policy
    return {
        "id": paper.id,
        "pmid": paper.pmid,
        "title": paper.title,
        "url": article_url(paper.pmid),
        "authors": list(paper.authors),
        "authors_line": format_authors(paper, policy),
        "author_count": paper.author_count,
        "journal": paper.journal,
        "year": paper.year,
        "doi": paper.doi,
        "meta": meta_fields(paper),
        "abstract": display_abstract(paper.abstract, policy),
        "tags": list(policy.tags),
    }


def build_view(state: SearchState, policy: Optional[SearchPolicy] = None) -> Dict[str, Any]:
    """
    Build the render context for a search state.

    Returns:
        Dict with keys: status, error, stats, total_count, shown, cards, hint.
        The idle hint shows whenever there is nothing else to display: before
        any search, and after a search whose articles were all dropped.
    """
    policy = policy or search_policy
    view: Dict[str, Any] = {
        "status": state.status.value,
        "error": None,
        "stats": None,
        "total_count": 0,
        "shown": 0,
        "cards": [],
        "hint": None,
    }

    if isinstance(state, Idle):
        view["hint"] = IDLE_HINT
    elif isinstance(state, (NoResults, Failed)):
        view["error"] = state.message
    elif isinstance(state, Success):
        view["cards"] = [paper_card(p, policy) for p in state.papers]
        view["total_count"] = state.total_count
        view["shown"] = len(state.papers)
        if state.total_count > 0:
            view["stats"] = result_stats(state.total_count, len(state.papers))
        if not state.papers:
            view["hint"] = IDLE_HINT

    return view
