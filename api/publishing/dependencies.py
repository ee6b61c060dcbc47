"""
Request-scoped publish dependencies.
"""

from __future__ import annotations

from datetime import datetime

from . import policy


def request_time() -> datetime:
    # One timestamp per request; every write in the request uses the same "now".
    return policy.utc_now()
