from __future__ import annotations

import itertools
import time
import uuid

_section_counter = itertools.count(1)


def _timestamp_ms() -> int:
    return time.time_ns() // 1_000_000


def generate_section_id() -> str:
    return f"section-{_timestamp_ms()}-{next(_section_counter)}-{uuid.uuid4().hex[:4]}"


def generate_page_id() -> str:
    return f"page-{_timestamp_ms()}-{uuid.uuid4().hex[:8]}"


__all__ = ["generate_page_id", "generate_section_id"]
