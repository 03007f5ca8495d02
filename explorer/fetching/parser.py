"""
RecordParser: PubMed efetch XML to Paper records.

Each field is read from the first matching descendant of the article, in
document order. Articles lacking an ArticleTitle or PMID element are dropped.
"""
import logging
import xml.etree.ElementTree as ET
from typing import List, Optional, Union

from explorer.config.search_policy import SearchPolicy, search_policy
from explorer.core.paper import Paper

logger = logging.getLogger(__name__)

TITLE_PATH = ".//ArticleTitle"
ABSTRACT_PATH = ".//AbstractText"
JOURNAL_PATH = ".//Journal//Title"
YEAR_PATH = ".//PubDate//Year"
PMID_PATH = ".//PMID"
DOI_PATH = ".//ArticleId[@IdType='doi']"


def _text(elem: Optional[ET.Element]) -> str:
    """Text content of an element including nested markup, '' when absent."""
    if elem is None:
        return ""
    return "".join(elem.itertext())


def _author_names(article: ET.Element) -> List[str]:
    names = []
    for author in article.iter("Author"):
        last_name = _text(author.find(".//LastName"))
        fore_name = _text(author.find(".//ForeName"))
        if last_name or fore_name:
            names.append(f"{fore_name} {last_name}".strip())
    return names


def parse_article(article: ET.Element, policy: Optional[SearchPolicy] = None) -> Optional[Paper]:
    """Build a Paper from one PubmedArticle element, or None if it lacks a title or PMID."""
    policy = policy or search_policy

    title_elem = article.find(TITLE_PATH)
    pmid_elem = article.find(PMID_PATH)
    if title_elem is None or pmid_elem is None:
        return None

    defaults = policy.defaults
    authors = _author_names(article)

    return Paper(
        pmid=_text(pmid_elem),
        title=_text(title_elem),
        authors=authors[:policy.display.max_authors],
        author_count=len(authors),
        abstract=_text(article.find(ABSTRACT_PATH)) or defaults.abstract,
        journal=_text(article.find(JOURNAL_PATH)) or defaults.journal,
        year=_text(article.find(YEAR_PATH)) or defaults.year,
        doi=_text(article.find(DOI_PATH)) or None,
    )


def parse_articles(raw_xml: Union[str, bytes], policy: Optional[SearchPolicy] = None) -> List[Paper]:
    """
    Parse an efetch payload into Papers.

    Args:
        raw_xml: PubmedArticleSet document as returned by efetch (retmode=xml).
        policy: Search policy supplying caps and placeholders.

    Returns:
        Papers in document order. Incomplete articles are skipped silently.

    Raises:
        xml.etree.ElementTree.ParseError: If the payload is not well-formed XML.
    """
    root = ET.fromstring(raw_xml)

    papers = []
    skipped = 0
    for article in root.iter("PubmedArticle"):
        paper = parse_article(article, policy)
        if paper is None:
            skipped += 1
            continue
        papers.append(paper)

    if skipped:
        logger.debug(f"RecordParser skipped {skipped} article(s) without title or PMID")
    return papers
