"""Domain event constants and publisher.

Defines event type constants and a simple publish() callable used by the
generation, autosave and submission flows.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Deque, Dict, List
import logging

logger = logging.getLogger(__name__)

ASSESSMENT_GENERATED = "assessment.generated"
QUESTION_BANK_RESEEDED = "question_bank.reseeded"
RESPONSE_DRAFT_SAVED = "response.draft_saved"
RESPONSE_SUBMITTED = "response.submitted"

# Oldest events are dropped once the buffer is full
EVENT_BUFFER_LIMIT = 1000


def publish(event_type: str, payload: Dict[str, Any]) -> None:
    """Publish a domain event.

    Events are logged for observability and kept in a bounded in-process
    buffer so tests and embedding applications can drain the recent ones.
    """
    logger.info("event_publish type=%s payload=%s", event_type, payload)
    EVENT_BUFFER.append({"type": event_type, "payload": payload})


EVENT_BUFFER: Deque[Dict[str, Any]] = deque(maxlen=EVENT_BUFFER_LIMIT)


def get_buffered_events(clear: bool = True) -> List[Dict[str, Any]]:
    """Return buffered domain events; optionally clear the buffer."""
    events = list(EVENT_BUFFER)
    if clear:
        EVENT_BUFFER.clear()
    return events


__all__ = [
    "ASSESSMENT_GENERATED",
    "EVENT_BUFFER_LIMIT",
    "QUESTION_BANK_RESEEDED",
    "RESPONSE_DRAFT_SAVED",
    "RESPONSE_SUBMITTED",
    "publish",
    "get_buffered_events",
    "EVENT_BUFFER",
]
