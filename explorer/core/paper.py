"""Paper definition for the explorer.

A "Paper" is one PubMed article normalized for display. It is identified by its
PMID and only exists for the lifetime of a single search result.

Field rules:
- title and pmid are required; articles without them never become Papers
- authors holds at most the display cap of names, in document order
- author_count is the number of named authors seen before the cap
- abstract, journal and year carry placeholders when the source lacks them
- doi is None when the source lists no DOI-typed article id
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional


@dataclass
class Paper:
    pmid: str
    title: str
    authors: List[str] = field(default_factory=list)
    abstract: str = ""
    journal: str = ""
    year: str = ""
    doi: Optional[str] = None
    author_count: int = 0

    @property
    def id(self) -> str:
        return self.pmid

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
