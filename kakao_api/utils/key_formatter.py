"""
kakao_api/utils/key_formatter.py

WHAT THIS FILE IS FOR
---------------------
Builds the value of the Authorization header sent on every call:

    Authorization: KakaoAK <REST API key>

The scheme prefix comes from Settings.key_prefix; the secret is trimmed.

WHAT THIS FILE IS NOT FOR
-------------------------
This module does NOT:
- Store or look up keys (see settings.py)
- Validate keys against the API
"""

from __future__ import annotations

AUTHORIZATION_HEADER = "Authorization"
DEFAULT_KEY_PREFIX = "KakaoAK"


def format_key(secret: str, prefix: str = DEFAULT_KEY_PREFIX) -> str:
    """
    Build the Authorization header value: "<prefix> <trimmed secret>".

    Never fails; an empty secret yields just the prefix and a space.
    """
    return f"{prefix.strip()} {(secret or '').strip()}"
