"""Entry export."""

from __future__ import annotations

import json
from typing import Sequence

from moodmemories.domains.journal.schemas import Entry

EXPORT_FILENAME = "mood-entries.json"


def export_entries(entries: Sequence[Entry]) -> str:
    """Serialize entries in storage order as indented JSON."""
    if not entries:
        raise ValueError("no_entries")
    return json.dumps([e.model_dump() for e in entries], indent=2)
