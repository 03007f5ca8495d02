from pydantic import BaseModel
from typing import List, Optional


class PaperOut(BaseModel):
    pmid: str
    title: str
    url: str
    authors: List[str]
    authors_line: str
    author_count: int
    abstract: str
    journal: str
    year: str
    doi: Optional[str] = None


class SearchResponse(BaseModel):
    query: str
    status: str
    total_count: int = 0
    shown: int = 0
    stats: Optional[str] = None
    message: Optional[str] = None
    papers: List[PaperOut] = []
