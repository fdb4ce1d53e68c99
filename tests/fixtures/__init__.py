"""
Test fixtures for the model filter.

- RecordingQuery: Accumulator that records every condition added
- EqualsOnlyQuery: Accumulator missing most where_* methods
- MultiValueForm: Submitted form holding several values per field
- TICKET_RULES: A typical rule set for a ticket list page
"""

from tests.fixtures.forms import MultiValueForm
from tests.fixtures.recording import EqualsOnlyQuery, RecordingQuery

TICKET_RULES = {
    "id": ("primary",),
    "status": ("in", "status"),
    "created_from": ("from", "created_at"),
    "created_to": ("to", "created_at"),
    "subject": ("like",),
    "assignee": ("equals", "assigned_to"),
}

__all__ = [
    "TICKET_RULES",
    "EqualsOnlyQuery",
    "MultiValueForm",
    "RecordingQuery",
]
