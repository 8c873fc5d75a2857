"""Pending-state projection for optimistic rendering.

Mutation requests are tracked in a PendingTable keyed by request ID while
they are in flight. project() reads the outstanding requests and derives
what the page should show before the server answers: a busy add form,
busy bulk-action buttons, and rows hidden because their delete is in
flight. Nothing here touches the task store.
"""

import contextlib
import itertools
import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional

from todo_app.actions import Intent

logger = logging.getLogger(__name__)


class RequestState(Enum):
    """Lifecycle of a mutation request."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class PendingRequest:
    """One mutation request and its declared intent and payload."""

    request_id: int
    intent: Optional[Intent]
    payload: Mapping[str, str] = field(default_factory=dict)
    state: RequestState = RequestState.IDLE


@dataclass(frozen=True)
class PendingState:
    """What the page renders differently while requests are in flight.

    Attributes:
        is_adding: A create is in flight; the add form is disabled
        is_clearing_completed: A clear-completed is in flight
        is_deleting_all: A delete-all is in flight
        excluded_ids: Task IDs with a delete in flight; their rows are hidden
    """

    is_adding: bool = False
    is_clearing_completed: bool = False
    is_deleting_all: bool = False
    excluded_ids: FrozenSet[int] = frozenset()

    @property
    def reset_add_form(self) -> bool:
        """Whether the add form should be cleared and refocused."""
        return not self.is_adding


def project(requests: Iterable[PendingRequest]) -> PendingState:
    """Derive the pending state from the outstanding requests.

    Only requests still in the SUBMITTING state count; settled requests
    have no effect on rendering.
    """
    intents = set()
    excluded = set()

    for request in requests:
        if request.state is not RequestState.SUBMITTING:
            continue
        intents.add(request.intent)
        if request.intent is Intent.DELETE_TASK:
            try:
                excluded.add(int(request.payload.get("id", "")))
            except ValueError:
                # Malformed ID: the server will reject it, nothing to hide
                continue

    return PendingState(
        is_adding=Intent.CREATE_TASK in intents,
        is_clearing_completed=Intent.CLEAR_COMPLETED in intents,
        is_deleting_all=Intent.DELETE_ALL in intents,
        excluded_ids=frozenset(excluded),
    )


class PendingTable:
    """Table of in-flight mutation requests keyed by request ID.

    A request moves idle -> submitting when submitted and is removed when it
    settles, whether it succeeded or failed. There is no retry. The web app
    keeps one table and records every write it is handling, so a page
    rendered while a write is in flight reflects it.
    """

    def __init__(self):
        self._requests: Dict[int, PendingRequest] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def submit(self, intent: Optional[Intent], payload: Optional[Mapping[str, str]] = None) -> int:
        """Record a request as submitting.

        Returns:
            The request ID used to settle it later
        """
        with self._lock:
            request = PendingRequest(request_id=next(self._ids), intent=intent, payload=dict(payload or {}))
            request.state = RequestState.SUBMITTING
            self._requests[request.request_id] = request
        return request.request_id

    def submit_form(self, form: Mapping[str, str]) -> int:
        """Record a submitted form, resolving its intent label."""
        try:
            intent = Intent(form.get("intent"))
        except ValueError:
            intent = None
        payload = {key: value for key, value in form.items() if key != "intent"}
        return self.submit(intent, payload)

    def settle(self, request_id: int, ok: bool) -> PendingRequest:
        """Mark a request settled and drop it from the table.

        Raises:
            KeyError: If the request ID is not outstanding
        """
        with self._lock:
            request = self._requests.pop(request_id)
        request.state = RequestState.SUCCEEDED if ok else RequestState.FAILED
        if not ok:
            logger.info("Request %d (%s) failed", request_id, request.intent and request.intent.value)
        return request

    @contextlib.contextmanager
    def track(self, form: Mapping[str, str]) -> Iterator[int]:
        """Keep a form submission outstanding for the duration of the block.

        The request settles as succeeded if the block finishes and as failed
        if it raises; the exception still propagates.
        """
        request_id = self.submit_form(form)
        ok = False
        try:
            yield request_id
            ok = True
        finally:
            self.settle(request_id, ok)

    def outstanding(self) -> List[PendingRequest]:
        with self._lock:
            return list(self._requests.values())

    def state(self) -> PendingState:
        return project(self.outstanding())

    def __len__(self) -> int:
        with self._lock:
            return len(self._requests)
