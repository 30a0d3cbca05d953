"""
Identity Similarity Scorer

Decides how likely it is that two author identities belong to the same
person. Signals are evaluated in a fixed precedence:

  1. Email evidence:  exact address, shared local-part, GitHub no-reply
  2. Name similarity: only consulted when the emails say nothing
  3. Name veto:       an email match with clearly unrelated names is demoted

The returned confidence is always in [0, 1]. Both signals are symmetric,
so score(a, b) and score(b, a) agree on confidence and reason.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from rapidfuzz.distance import Levenshtein

from gitwiser.identity.normalize import email_domain, email_local_part, normalize_name

DEFAULT_THRESHOLD = 0.6

# Email signal confidences
CONFIDENCE_EXACT_EMAIL = 1.0
CONFIDENCE_GITHUB_NOREPLY = 0.95
CONFIDENCE_SAME_LOCAL_PART = 0.8
CONFIDENCE_GITHUB_NOREPLY_MATCH = 0.7

# Name signal weights
NAME_SUBSTRING_SCORE = 0.9
NAME_MATCH_FLOOR = 0.8
NAME_MISMATCH_CEILING = 0.3
NAME_MISMATCH_PENALTY = 0.6
SAME_DOMAIN_WEIGHT = 0.9
OTHER_DOMAIN_WEIGHT = 0.7

# Local-parts this short ("me", "dev") are too generic to trust
MIN_LOCAL_PART_LENGTH = 4

GITHUB_NOREPLY_RE = re.compile(r"^(\d+\+)?([^@]+)@users\.noreply\.github\.com$")


class ReasonCode(str, Enum):
    """Which heuristic produced a match decision."""

    NONE = ""
    EXACT_EMAIL = "exact-email"
    SAME_LOCAL_PART = "same-local-part"
    GITHUB_NOREPLY = "github-noreply"
    GITHUB_NOREPLY_MATCH = "github-noreply-match"
    EXACT_EMAIL_NAME_MISMATCH = "exact-email-name-mismatch"
    SAME_LOCAL_PART_NAME_MISMATCH = "same-local-part-name-mismatch"
    GITHUB_NOREPLY_NAME_MISMATCH = "github-noreply-name-mismatch"
    GITHUB_NOREPLY_MATCH_NAME_MISMATCH = "github-noreply-match-name-mismatch"
    SIMILAR_NAME_SAME_DOMAIN = "similar-name-same-domain"
    SIMILAR_NAME = "similar-name"

    def demoted(self) -> "ReasonCode":
        """The -name-mismatch variant of an email reason."""
        return ReasonCode(f"{self.value}-name-mismatch")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class IdentityRecord:
    """One (name, email) pair as it appears in history."""
    name: str
    email: str
    commit_count: int

    def __post_init__(self) -> None:
        if self.commit_count < 1:
            raise ValueError(
                f"commit_count must be >= 1, got {self.commit_count} for {self.email!r}"
            )


@dataclass(frozen=True)
class MatchResult:
    is_match: bool
    confidence: float
    reason: ReasonCode = ReasonCode.NONE


NO_MATCH = MatchResult(is_match=False, confidence=0.0, reason=ReasonCode.NONE)


# ---------------------------------------------------------------------------
# Name similarity
# ---------------------------------------------------------------------------

def levenshtein(a: str, b: str) -> int:
    """Classic insert/delete/substitute edit distance, unit costs."""
    return Levenshtein.distance(a, b)


def name_similarity(name1: str, name2: str) -> float:
    """
    Similarity of two display names in [0, 1].

    Cheaper, stronger signals short-circuit before the edit-distance
    fallback: equality, then substring containment, then token overlap.
    """
    n1 = normalize_name(name1)
    n2 = normalize_name(name2)

    if n1 == n2:
        return 1.0
    if not n1 or not n2:
        return 0.0
    if n1 in n2 or n2 in n1:
        return NAME_SUBSTRING_SCORE

    words1 = set(n1.split(" "))
    words2 = set(n2.split(" "))
    jaccard = len(words1 & words2) / len(words1 | words2)
    if jaccard > 0.5:
        return 0.7 + jaccard * 0.2

    max_len = max(len(n1), len(n2))
    return 1 - levenshtein(n1, n2) / max_len


# ---------------------------------------------------------------------------
# Email matching
# ---------------------------------------------------------------------------

def _github_username(email: str) -> str | None:
    match = GITHUB_NOREPLY_RE.match(email)
    return match.group(2) if match else None


def emails_match(email1: str, email2: str) -> MatchResult:
    e1 = email1.lower()
    e2 = email2.lower()

    if e1 == e2:
        return MatchResult(True, CONFIDENCE_EXACT_EMAIL, ReasonCode.EXACT_EMAIL)

    local1 = email_local_part(e1)
    local2 = email_local_part(e2)
    if local1 == local2 and len(local1) >= MIN_LOCAL_PART_LENGTH:
        return MatchResult(True, CONFIDENCE_SAME_LOCAL_PART, ReasonCode.SAME_LOCAL_PART)

    gh1 = _github_username(e1)
    gh2 = _github_username(e2)
    if gh1 is not None and gh1 == gh2:
        return MatchResult(True, CONFIDENCE_GITHUB_NOREPLY, ReasonCode.GITHUB_NOREPLY)
    if (gh1 is not None and local2 == gh1) or (gh2 is not None and local1 == gh2):
        return MatchResult(
            True, CONFIDENCE_GITHUB_NOREPLY_MATCH, ReasonCode.GITHUB_NOREPLY_MATCH
        )

    return NO_MATCH


# ---------------------------------------------------------------------------
# Combined scoring
# ---------------------------------------------------------------------------

def score(
    a: IdentityRecord, b: IdentityRecord, threshold: float = DEFAULT_THRESHOLD
) -> MatchResult:
    """Score a record pair; is_match is confidence >= threshold (inclusive)."""
    email_result = emails_match(a.email, b.email)
    name_sim = name_similarity(a.name, b.name)

    confidence = 0.0
    reason = ReasonCode.NONE

    if email_result.is_match:
        confidence = email_result.confidence
        reason = email_result.reason
        if name_sim < NAME_MISMATCH_CEILING:
            confidence = email_result.confidence * NAME_MISMATCH_PENALTY
            reason = email_result.reason.demoted()
    elif name_sim > NAME_MATCH_FLOOR:
        if email_domain(a.email) == email_domain(b.email):
            confidence = name_sim * SAME_DOMAIN_WEIGHT
            reason = ReasonCode.SIMILAR_NAME_SAME_DOMAIN
        else:
            confidence = name_sim * OTHER_DOMAIN_WEIGHT
            reason = ReasonCode.SIMILAR_NAME

    return MatchResult(
        is_match=confidence >= threshold,
        confidence=confidence,
        reason=reason,
    )
