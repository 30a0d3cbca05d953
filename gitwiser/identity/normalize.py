"""
Identity Normalizer

Canonical forms for author names and email addresses so that spelling,
casing and punctuation variants compare equal. Every function here is
total: empty input yields empty (or False) output, never an error.
"""

from __future__ import annotations

import re

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_WHITESPACE = re.compile(r"\s+")

NOREPLY_MARKERS = (
    "noreply",
    "no-reply",
    "@users.noreply.github.com",
    "@users.noreply.gitlab.com",
    "+",
)


def normalize_name(name: str) -> str:
    """Lower-case, strip punctuation to spaces, collapse whitespace."""
    lowered = _NON_ALNUM.sub(" ", name.lower())
    return _WHITESPACE.sub(" ", lowered).strip()


def email_local_part(email: str) -> str:
    return email.split("@", 1)[0].lower()


def email_domain(email: str) -> str:
    parts = email.split("@", 1)
    return parts[1].lower() if len(parts) > 1 else ""


def is_noreply_address(email: str) -> bool:
    """True for provider no-reply addresses and plus-tagged aliases."""
    lowered = email.lower()
    return any(marker in lowered for marker in NOREPLY_MARKERS)
