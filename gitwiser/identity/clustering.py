"""
Identity Cluster Builder

Greedy single-pass grouping of author identities.

Records are visited in commit-count order. Each unassigned record becomes a
canonical candidate and absorbs every later unassigned record it matches
directly. Matching is not transitive: if A absorbs B, a record C that only
matches B is never compared against B and may end up elsewhere.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from loguru import logger

from gitwiser.identity.normalize import is_noreply_address
from gitwiser.identity.scoring import (
    DEFAULT_THRESHOLD,
    IdentityRecord,
    ReasonCode,
    score,
)


@dataclass(frozen=True)
class Alias:
    """A non-canonical record merged into a cluster, with the evidence."""
    record: IdentityRecord
    confidence: float
    reason: ReasonCode


@dataclass(frozen=True)
class Cluster:
    canonical: IdentityRecord
    aliases: tuple[Alias, ...]
    reason: ReasonCode

    @property
    def total_commits(self) -> int:
        return self.canonical.commit_count + sum(a.record.commit_count for a in self.aliases)

    @property
    def records(self) -> list[IdentityRecord]:
        """Canonical first, then aliases in merge order."""
        return [self.canonical, *(a.record for a in self.aliases)]


def _ordered(records: Sequence[IdentityRecord], prefer_human: bool) -> list[IdentityRecord]:
    # sorted() is stable, so equal keys keep input order
    if prefer_human:
        return sorted(
            records,
            key=lambda r: (-r.commit_count, is_noreply_address(r.email)),
        )
    return sorted(records, key=lambda r: -r.commit_count)


def build_clusters(
    records: Iterable[IdentityRecord],
    min_confidence: float = DEFAULT_THRESHOLD,
    prefer_human: bool = False,
) -> list[Cluster]:
    """
    Group records that belong to the same contributor.

    Args:
        records: Identity records in caller order (used to break commit ties)
        min_confidence: Inclusive merge threshold in [0, 1]
        prefer_human: Among equal commit counts, put non-no-reply addresses
            first so they become canonical

    Returns:
        Clusters with at least one alias, sorted by total commits descending.
        Records that matched nothing are not wrapped in a cluster.
    """
    ordered = _ordered(list(records), prefer_human)
    assigned: set[int] = set()
    clusters: list[Cluster] = []

    for i, canonical in enumerate(ordered):
        if i in assigned:
            continue

        aliases: list[Alias] = []
        cluster_reason = ReasonCode.NONE

        for j in range(i + 1, len(ordered)):
            if j in assigned:
                continue

            candidate = ordered[j]
            result = score(canonical, candidate, threshold=min_confidence)
            if not result.is_match:
                continue

            aliases.append(Alias(candidate, result.confidence, result.reason))
            assigned.add(j)
            if cluster_reason is ReasonCode.NONE:
                cluster_reason = result.reason

        if aliases:
            assigned.add(i)
            clusters.append(Cluster(canonical, tuple(aliases), cluster_reason))
            logger.debug(
                f"[CLUSTER] {canonical.name} <{canonical.email}> absorbed "
                f"{len(aliases)} alias(es) ({cluster_reason.value})"
            )

    clusters.sort(key=lambda c: -c.total_commits)
    logger.debug(
        f"[CLUSTER] {len(ordered)} identities → {len(clusters)} clusters "
        f"(min_confidence={min_confidence})"
    )
    return clusters
