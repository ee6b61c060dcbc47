"""
Admin credential check.
"""

from __future__ import annotations

import hmac


def verify_admin_token(presented: str, expected: str) -> bool:
    """
    Exact match of the presented bearer token against the configured secret.

    An empty secret means admin access is disabled, so nothing matches it.
    """
    token = (presented or "").encode("utf-8")
    secret = (expected or "").encode("utf-8")
    if not token or not secret:
        return False
    return hmac.compare_digest(token, secret)
