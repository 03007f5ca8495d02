"""
Shared fixtures: efetch XML builders, fake HTTP responses and a fake provider.
"""
import json
from typing import List, Optional

import pytest
import requests

from explorer.fetching.providers.base import FetchError, NoResultsError, PaperProvider, SearchOutcome


def make_article(
    pmid: Optional[str] = "100",
    title: Optional[str] = "A study of drug candidates",
    abstract: Optional[str] = "Background text.",
    journal: Optional[str] = "Journal of Pharmacology",
    year: Optional[str] = "2023",
    doi: Optional[str] = None,
    authors: Optional[List[tuple]] = None,
) -> str:
    """Build one PubmedArticle element. None omits the element entirely."""
    parts = ["<PubmedArticle><MedlineCitation>"]
    if pmid is not None:
        parts.append(f'<PMID Version="1">{pmid}</PMID>')
    parts.append("<Article>")
    parts.append("<Journal><JournalIssue><PubDate>")
    if year is not None:
        parts.append(f"<Year>{year}</Year>")
    parts.append("</PubDate></JournalIssue>")
    if journal is not None:
        parts.append(f"<Title>{journal}</Title>")
    parts.append("</Journal>")
    if title is not None:
        parts.append(f"<ArticleTitle>{title}</ArticleTitle>")
    if abstract is not None:
        parts.append(f"<Abstract><AbstractText>{abstract}</AbstractText></Abstract>")
    if authors:
        parts.append('<AuthorList CompleteYN="Y">')
        for fore, last in authors:
            parts.append("<Author>")
            if last is not None:
                parts.append(f"<LastName>{last}</LastName>")
            if fore is not None:
                parts.append(f"<ForeName>{fore}</ForeName>")
            parts.append("</Author>")
        parts.append("</AuthorList>")
    parts.append("</Article></MedlineCitation>")
    parts.append("<PubmedData><ArticleIdList>")
    if pmid is not None:
        parts.append(f'<ArticleId IdType="pubmed">{pmid}</ArticleId>')
    if doi is not None:
        parts.append(f'<ArticleId IdType="doi">{doi}</ArticleId>')
    parts.append("</ArticleIdList></PubmedData></PubmedArticle>")
    return "".join(parts)


def make_article_set(*articles: str) -> str:
    return (
        '<?xml version="1.0" ?>\n'
        '<!DOCTYPE PubmedArticleSet PUBLIC "-//NLM//DTD PubMedArticle, 1st January 2024//EN" '
        '"https://dtd.nlm.nih.gov/ncbi/pubmed/out/pubmed_240101.dtd">\n'
        "<PubmedArticleSet>" + "".join(articles) + "</PubmedArticleSet>"
    )


def make_esearch(ids: List[str], count: Optional[str] = None) -> dict:
    return {
        "header": {"type": "esearch", "version": "0.3"},
        "esearchresult": {
            "count": count if count is not None else str(len(ids)),
            "retmax": str(len(ids)),
            "retstart": "0",
            "idlist": ids,
        },
    }


class FakeResponse:
    """Stand-in for requests.Response covering what the provider uses."""

    def __init__(self, status_code: int = 200, json_data=None, text: str = ""):
        self.status_code = status_code
        self._json_data = json_data
        self.text = text if json_data is None else json.dumps(json_data)
        self.content = self.text.encode("utf-8")

    def json(self):
        if self._json_data is None:
            return json.loads(self.text)
        return self._json_data

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class RecordingGet:
    """Replacement for requests.get that replays queued responses and records calls."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def __call__(self, url, params=None, timeout=None, **kwargs):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeProvider(PaperProvider):
    """Provider returning a canned outcome or raising a canned error."""

    def __init__(self, outcome: Optional[SearchOutcome] = None, error: Optional[Exception] = None):
        self.name = "fake"
        self.outcome = outcome
        self.error = error
        self.requests = []

    def search(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.outcome


@pytest.fixture
def fake_get(monkeypatch):
    """Install a RecordingGet in the PubMed provider module; call with responses."""
    def install(*responses):
        recorder = RecordingGet(*responses)
        monkeypatch.setattr("explorer.fetching.providers.pubmed.requests.get", recorder)
        return recorder
    return install


@pytest.fixture
def no_results_provider():
    return FakeProvider(error=NoResultsError("empty"))


@pytest.fixture
def failing_provider():
    return FakeProvider(error=FetchError("boom"))
