"""
Alias-Map Rendering

Turns clusters into git's .mailmap text and a summary of how much the
identity list shrank. Pure functions; writing the file is the caller's job.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from gitwiser.identity.clustering import Cluster
from gitwiser.identity.scoring import IdentityRecord

MAILMAP_HEADER = "# Generated by gitwiser (gitwiser authors)"
MAILMAP_FORMAT = "# Format: Proper Name <proper@email.com> Alias Name <alias@email.com>"


def render_mailmap(clusters: Sequence[Cluster]) -> str:
    lines = [MAILMAP_HEADER, MAILMAP_FORMAT, ""]

    for cluster in clusters:
        canonical = cluster.canonical
        lines.append(f"# Cluster: {canonical.name} ({cluster.total_commits} commits)")
        for alias in cluster.aliases:
            lines.append(
                f"{canonical.name} <{canonical.email}> "
                f"{alias.record.name} <{alias.record.email}>"
            )
        lines.append("")

    return "\n".join(lines)


@dataclass(frozen=True)
class IdentityStats:
    total_identities: int
    duplicate_identities: int
    unique_contributors: int
    consolidation_rate: float  # percent, one decimal
    cluster_count: int


def compute_stats(
    records: Sequence[IdentityRecord], clusters: Sequence[Cluster]
) -> IdentityStats:
    """Summarize a clustering run. An empty record list reports a 0.0% rate."""
    total = len(records)
    duplicates = sum(len(c.aliases) for c in clusters)
    return IdentityStats(
        total_identities=total,
        duplicate_identities=duplicates,
        unique_contributors=total - duplicates,
        consolidation_rate=round(duplicates / total * 100, 1) if total > 0 else 0.0,
        cluster_count=len(clusters),
    )
