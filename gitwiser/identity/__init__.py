"""
gitwiser Identity Engine

Resolves the many (name, email) pairs found in a repository's history into
the real contributors behind them.

Usage:
    from gitwiser.identity import build_clusters, render_mailmap, compute_stats

    clusters = build_clusters(records, min_confidence=0.7)
    print(render_mailmap(clusters))
"""

from .clustering import Alias, Cluster, build_clusters
from .mailmap import IdentityStats, compute_stats, render_mailmap
from .normalize import email_domain, email_local_part, is_noreply_address, normalize_name
from .scoring import (
    DEFAULT_THRESHOLD,
    IdentityRecord,
    MatchResult,
    ReasonCode,
    emails_match,
    levenshtein,
    name_similarity,
    score,
)

__all__ = [
    "Alias",
    "Cluster",
    "DEFAULT_THRESHOLD",
    "IdentityRecord",
    "IdentityStats",
    "MatchResult",
    "ReasonCode",
    "build_clusters",
    "compute_stats",
    "email_domain",
    "email_local_part",
    "emails_match",
    "is_noreply_address",
    "levenshtein",
    "name_similarity",
    "normalize_name",
    "render_mailmap",
    "score",
]
