"""
Search session: the UI state bag and its state machine.

    Idle -> Searching -> {Success, NoResults, Failed}

Every submission re-enters Searching with a fresh sequence token. A response
is applied only if its token is still the latest one issued, so a slow,
stale search can never overwrite the state of a newer one.
"""
import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Union

from explorer.core.paper import Paper
from explorer.fetching.query_builder import SearchRequest

logger = logging.getLogger(__name__)


class SearchStatus(str, Enum):
    IDLE = "idle"
    SEARCHING = "searching"
    SUCCESS = "success"
    NO_RESULTS = "no_results"
    FAILED = "failed"


@dataclass(frozen=True)
class Idle:
    status: ClassVar[SearchStatus] = SearchStatus.IDLE


@dataclass(frozen=True)
class Searching:
    request: SearchRequest
    status: ClassVar[SearchStatus] = SearchStatus.SEARCHING


@dataclass(frozen=True)
class Success:
    total_count: int
    papers: List[Paper] = field(default_factory=list)
    status: ClassVar[SearchStatus] = SearchStatus.SUCCESS


@dataclass(frozen=True)
class NoResults:
    message: str
    status: ClassVar[SearchStatus] = SearchStatus.NO_RESULTS


@dataclass(frozen=True)
class Failed:
    message: str
    status: ClassVar[SearchStatus] = SearchStatus.FAILED


SearchState = Union[Idle, Searching, Success, NoResults, Failed]


class SearchSession:
    """Holds the current search state and the latest issued request token."""

    def __init__(self):
        self._lock = threading.Lock()
        self._sequence = 0
        self.state: SearchState = Idle()

    @property
    def latest_token(self) -> int:
        return self._sequence

    def begin(self, request: SearchRequest) -> int:
        """Enter Searching for a new request, clearing prior results and errors."""
        with self._lock:
            self._sequence += 1
            self.state = Searching(request)
            return self._sequence

    def resolve(self, token: int, state: SearchState) -> bool:
        """
        Apply a terminal state for the request identified by token.

        Returns:
            True if applied, False if a newer request has been issued since.
        """
        with self._lock:
            if token != self._sequence:
                logger.info(
                    f"SearchSession: dropping stale response (token {token}, latest {self._sequence})"
                )
                return False
            self.state = state
            return True
