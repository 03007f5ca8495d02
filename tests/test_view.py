import pytest

from explorer.core.paper import Paper
from explorer.fetching.query_builder import build_search_request
from explorer.fetching.session import Failed, Idle, NoResults, Searching, Success
from explorer.presentation.view import (
    IDLE_HINT,
    article_url,
    build_view,
    display_abstract,
    format_authors,
    paper_card,
    result_stats,
)


@pytest.mark.parametrize("count, expected", [
    (0, ""),
    (1, "A0"),
    (4, "A0, A1, A2, A3"),
    (5, "A0, A1, A2, A3, A4 et al."),
])
def test_et_al_only_at_display_cap(count, expected):
    paper = Paper(pmid="1", title="t", authors=[f"A{i}" for i in range(count)], author_count=count)
    assert format_authors(paper) == expected


def test_abstract_truncation():
    assert display_abstract("x" * 400) == "x" * 400
    assert display_abstract("x" * 401) == "x" * 400 + "..."
    assert display_abstract("short") == "short"
    assert display_abstract("No abstract available") == "No abstract available"


def test_result_stats_groups_thousands():
    assert result_stats(3, 3) == "Found 3 research papers (showing 3)"
    assert result_stats(123456, 20) == "Found 123,456 research papers (showing 20)"


def test_article_url():
    assert article_url("38000001") == "https://pubmed.ncbi.nlm.nih.gov/38000001/"


def test_card_omits_missing_doi():
    card = paper_card(Paper(pmid="5", title="T", journal="J", year="2020"))
    assert [f["label"] for f in card["meta"]] == ["Journal", "Year", "PMID"]
    assert card["tags"] == ["Drug Development", "PubMed"]
    assert card["url"].endswith("/5/")


def test_card_includes_doi():
    card = paper_card(Paper(pmid="5", title="T", doi="10.1/x"))
    assert {"label": "DOI", "value": "10.1/x"} in card["meta"]


def test_idle_view_shows_hint():
    view = build_view(Idle())
    assert view["status"] == "idle"
    assert view["hint"] == IDLE_HINT
    assert view["cards"] == [] and view["error"] is None


def test_searching_view_is_empty():
    view = build_view(Searching(build_search_request("aspirin", 20, "relevance")))
    assert view["status"] == "searching"
    assert view["hint"] is None
    assert view["cards"] == [] and view["error"] is None


@pytest.mark.parametrize("state", [NoResults("none found"), Failed("try again")])
def test_error_views_have_no_cards(state):
    view = build_view(state)
    assert view["error"] == state.message
    assert view["cards"] == []
    assert view["stats"] is None


def test_success_view():
    papers = [Paper(pmid=str(i), title=f"T{i}") for i in range(3)]
    view = build_view(Success(total_count=3, papers=papers))

    assert view["stats"] == "Found 3 research papers (showing 3)"
    assert len(view["cards"]) == 3
    assert view["hint"] is None


def test_success_with_zero_total_hides_stats():
    assert build_view(Success(total_count=0, papers=[]))["stats"] is None


def test_success_with_all_articles_dropped_shows_hint():
    view = build_view(Success(total_count=4, papers=[]))

    assert view["hint"] == IDLE_HINT
    assert view["stats"] == "Found 4 research papers (showing 0)"
    assert view["cards"] == []


def test_card_carries_display_fields():
    paper = Paper(
        pmid="8", title="T", authors=[f"A{i}" for i in range(5)], author_count=7,
        abstract="b" * 401, journal="J", year="2021", doi="10.8/x",
    )
    card = paper_card(paper)

    assert card["authors"] == [f"A{i}" for i in range(5)]
    assert card["authors_line"] == "A0, A1, A2, A3, A4 et al."
    assert card["author_count"] == 7
    assert card["abstract"] == "b" * 400 + "..."
    assert (card["journal"], card["year"], card["doi"]) == ("J", "2021", "10.8/x")
