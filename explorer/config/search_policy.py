"""
SearchPolicy: search and display configuration.

This module defines the structure and loader for search_policy.json.
SearchPolicy is loaded once at import, validated via Pydantic,
and accessed via a singleton instance.

SearchPolicy contains:
- The drug-development filter conjoined to every query
- Allowed page sizes and sort orders for the search form
- Display caps (authors per card, abstract length)
- Placeholder strings for missing record fields
"""

import os
import json
import logging
from typing import Dict, List
from pydantic import BaseModel, Field, model_validator

logger = logging.getLogger(__name__)


# ===== Pydantic Models =====

class DisplayLimits(BaseModel):
    """Truncation limits applied when rendering a paper."""
    max_authors: int = 5
    abstract_chars: int = 400
    ellipsis: str = "..."
    et_al_marker: str = " et al."


class FieldDefaults(BaseModel):
    """Placeholders for article fields missing from the provider payload."""
    abstract: str = "No abstract available"
    journal: str = "Unknown Journal"
    year: str = "N/A"


class SearchPolicy(BaseModel):
    """Root SearchPolicy model."""
    database: str = "pubmed"
    domain_filter: str = (
        "(drug development[MeSH Terms] OR pharmaceutical development OR drug discovery)"
    )
    page_sizes: List[int] = Field(default_factory=lambda: [10, 20, 50, 100])
    default_page_size: int = 20
    sort_options: Dict[str, str] = Field(
        default_factory=lambda: {"relevance": "Relevance", "pub_date": "Publication Date"}
    )
    default_sort: str = "relevance"
    display: DisplayLimits = Field(default_factory=DisplayLimits)
    defaults: FieldDefaults = Field(default_factory=FieldDefaults)
    tags: List[str] = Field(default_factory=lambda: ["Drug Development", "PubMed"])

    @model_validator(mode="after")
    def validate_defaults(self):
        if self.default_page_size not in self.page_sizes:
            raise ValueError(
                f"default_page_size {self.default_page_size} is not one of {self.page_sizes}"
            )
        if self.default_sort not in self.sort_options:
            raise ValueError(f"default_sort '{self.default_sort}' is not a known sort option")
        return self

    def resolve_page_size(self, value) -> int:
        """Coerce a form value to an allowed page size, falling back to the default."""
        try:
            size = int(value)
        except (TypeError, ValueError):
            return self.default_page_size
        return size if size in self.page_sizes else self.default_page_size

    def resolve_sort(self, value) -> str:
        return value if value in self.sort_options else self.default_sort


# ===== Loader =====

def load_search_policy() -> SearchPolicy:
    """
    Load and validate search_policy.json.

    Returns:
        SearchPolicy: Validated search policy instance.

    Raises:
        RuntimeError: If the file cannot be loaded or validation fails.
    """
    try:
        config_path = os.path.join(os.path.dirname(__file__), "search_policy.json")
        with open(config_path, "r") as f:
            data = json.load(f)
        policy = SearchPolicy(**data)
        logger.info(
            f"Loaded SearchPolicy with page_sizes={policy.page_sizes}, "
            f"sort_options={list(policy.sort_options)}"
        )
        return policy
    except Exception as e:
        logger.error(f"CRITICAL: Failed to load search policy: {e}")
        raise RuntimeError(f"Could not load search policy: {e}") from e


# ===== Singleton Instance =====
# Load once at module import
search_policy = load_search_policy()
