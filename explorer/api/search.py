"""
Search API: the explorer page and its JSON counterpart.

- GET /            server-rendered search page (form + results)
- GET /api/search  same search as JSON

Each request runs on its own SearchSession; the page is rendered from the
session state the search leaves behind.
"""

import logging
import os
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from explorer.config.search_policy import search_policy
from explorer.fetching.service import SearchService, get_search_service
from explorer.fetching.session import SearchSession
from explorer.presentation.view import build_view
from explorer.schemas.search import PaperOut, SearchResponse

logger = logging.getLogger(__name__)
router = APIRouter(tags=["search"])

templates = Jinja2Templates(
    directory=os.path.join(os.path.dirname(os.path.dirname(__file__)), "presentation", "templates")
)


@router.get("/", response_class=HTMLResponse)
def search_page(
    request: Request,
    q: str = "",
    max_results: Optional[str] = None,
    sort: Optional[str] = None,
    service: SearchService = Depends(get_search_service),
):
    """
    Render the explorer page.

    A blank query renders the idle page. Unknown selector values fall back
    to the policy defaults rather than failing the page.
    """
    page_size = search_policy.resolve_page_size(max_results)
    sort_key = search_policy.resolve_sort(sort)

    session = SearchSession()
    state = service.search(session, q, page_size, sort_key)

    context = {
        "query": q,
        "max_results": page_size,
        "sort": sort_key,
        "page_sizes": search_policy.page_sizes,
        "sort_options": search_policy.sort_options,
        "view": build_view(state),
    }
    return templates.TemplateResponse(request, "index.html", context)


@router.get("/api/search", response_model=SearchResponse)
def search_json(
    q: str = Query(..., description="Free-text search query"),
    max_results: int = Query(search_policy.default_page_size),
    sort: Literal["relevance", "pub_date"] = Query(search_policy.default_sort),
    service: SearchService = Depends(get_search_service),
) -> SearchResponse:
    """
    Search PubMed and return normalized papers.

    Raises:
        HTTPException: 400 for a blank query, 422 for an unsupported page size.
    """
    if not q.strip():
        raise HTTPException(status_code=400, detail="Query cannot be empty")
    if max_results not in search_policy.page_sizes:
        raise HTTPException(
            status_code=422,
            detail=f"max_results must be one of {search_policy.page_sizes}",
        )

    session = SearchSession()
    state = service.search(session, q, max_results, sort)
    view = build_view(state)

    papers = [PaperOut(**card) for card in view["cards"]]

    return SearchResponse(
        query=q,
        status=view["status"],
        total_count=view["total_count"],
        shown=view["shown"],
        stats=view["stats"],
        message=view["error"],
        papers=papers,
    )
