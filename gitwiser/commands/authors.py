"""
gitwiser authors: duplicate author detection and .mailmap generation

Scans `git shortlog`, clusters identities that look like the same person,
and reports them as a table, JSON, or ready-to-use .mailmap text.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from loguru import logger
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from gitwiser.config_loader import AuthorsConfig, ConfigError, load_config
from gitwiser.identity import (
    Cluster,
    IdentityRecord,
    IdentityStats,
    build_clusters,
    compute_stats,
    render_mailmap,
)
from gitwiser.repository import GitError, GitRepository

console = Console()
err_console = Console(stderr=True)

OutputFormat = Literal["text", "json", "mailmap"]


# ---------------------------------------------------------------------------
# JSON Report Schemas
# ---------------------------------------------------------------------------

class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class IdentityOut(_CamelModel):
    name: str
    email: str
    commits: int

    @classmethod
    def from_record(cls, record: IdentityRecord) -> "IdentityOut":
        return cls(name=record.name, email=record.email, commits=record.commit_count)


class AliasOut(IdentityOut):
    confidence: float
    reason: str


class ClusterOut(_CamelModel):
    canonical: IdentityOut
    aliases: list[AliasOut]
    total_commits: int
    reason: str

    @classmethod
    def from_cluster(cls, cluster: Cluster) -> "ClusterOut":
        return cls(
            canonical=IdentityOut.from_record(cluster.canonical),
            aliases=[
                AliasOut(
                    name=a.record.name,
                    email=a.record.email,
                    commits=a.record.commit_count,
                    confidence=a.confidence,
                    reason=a.reason.value,
                )
                for a in cluster.aliases
            ],
            total_commits=cluster.total_commits,
            reason=cluster.reason.value,
        )


class StatsOut(_CamelModel):
    total_identities: int
    duplicate_identities: int
    unique_contributors: int
    consolidation_rate: float
    clusters: int

    @classmethod
    def from_stats(cls, stats: IdentityStats) -> "StatsOut":
        return cls(
            total_identities=stats.total_identities,
            duplicate_identities=stats.duplicate_identities,
            unique_contributors=stats.unique_contributors,
            consolidation_rate=stats.consolidation_rate,
            clusters=stats.cluster_count,
        )


class AuthorReport(_CamelModel):
    stats: StatsOut
    clusters: list[ClusterOut]
    mailmap: str

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)


def build_report(records: list[IdentityRecord], clusters: list[Cluster]) -> AuthorReport:
    return AuthorReport(
        stats=StatsOut.from_stats(compute_stats(records, clusters)),
        clusters=[ClusterOut.from_cluster(c) for c in clusters],
        mailmap=render_mailmap(clusters),
    )


# ---------------------------------------------------------------------------
# Command Handler
# ---------------------------------------------------------------------------

def _with_overrides(config: AuthorsConfig, **overrides) -> AuthorsConfig:
    """Apply non-None command-line overrides, re-validating the result."""
    updates = {k: v for k, v in overrides.items() if v is not None}
    if not updates:
        return config
    try:
        return AuthorsConfig(**{**config.model_dump(), **updates})
    except ValidationError as e:
        raise ConfigError(f"Invalid option: {e}") from e


def authors_command(
    path: Path,
    output: OutputFormat = "text",
    threshold: int | None = None,
    apply: bool = False,
    prefer_human: bool | None = None,
) -> int:
    """
    Run the authors audit. Returns a process exit code.

    Args:
        path: Any path inside the repository
        output: text | json | mailmap
        threshold: Percent confidence (0-100); overrides .gitwiser.yaml
        apply: Write the generated .mailmap into the repository
        prefer_human: Break commit-count ties away from no-reply addresses
    """
    repo = GitRepository(path)
    if not repo.is_git_repo():
        err_console.print(f"[red]❌ Not a git repository: {escape(str(repo.path))}[/]")
        return 1

    try:
        root = repo.root()
        config = _with_overrides(
            load_config(root).authors,
            threshold=threshold,
            prefer_human_canonical=prefer_human,
        )

        records = repo.scan_authors()
    except (ConfigError, GitError) as e:
        err_console.print(f"[red]❌ Failed to analyze authors: {escape(str(e))}[/]")
        return 1

    logger.info(
        f"[AUTHORS] Clustering {len(records)} identities at "
        f"{config.threshold}% (prefer_human={config.prefer_human_canonical})"
    )
    clusters = build_clusters(
        records,
        min_confidence=config.min_confidence,
        prefer_human=config.prefer_human_canonical,
    )
    report = build_report(records, clusters)

    if output == "json":
        print(report.to_json())
    elif output == "mailmap":
        print(report.mailmap)
    else:
        _print_text_report(report, config.max_display_clusters)

    if apply:
        status = console if output == "text" else err_console
        try:
            appended = repo.write_mailmap(report.mailmap)
        except (GitError, OSError) as e:
            status.print(f"[red]❌ Could not write .mailmap: {escape(str(e))}[/]")
            return 1
        if appended:
            status.print("[yellow]⚠ .mailmap already exists. Appended new entries.[/]")
        status.print(f"[green]✅ Generated .mailmap with {len(clusters)} clusters[/]")
        status.print("[dim]Run `git shortlog -sn` to see normalized authors[/]")
    elif output == "text":
        console.print("\n[dim]Use --output mailmap to generate .mailmap content[/]")
        console.print("[dim]Use --apply to write .mailmap file[/]")

    return 0


# ---------------------------------------------------------------------------
# Display Helpers
# ---------------------------------------------------------------------------

def _print_text_report(report: AuthorReport, max_clusters: int) -> None:
    stats = report.stats

    summary = Table(title="Author Analysis", show_header=False, border_style="cyan")
    summary.add_column("Metric", style="dim")
    summary.add_column("Value", style="bold")
    summary.add_row("Total identities", str(stats.total_identities))
    summary.add_row("Duplicate clusters", str(stats.clusters))
    summary.add_row("Duplicate identities", str(stats.duplicate_identities))
    summary.add_row("Unique contributors", str(stats.unique_contributors))
    summary.add_row("Consolidation rate", f"{stats.consolidation_rate:.1f}%")
    console.print(summary)

    if not report.clusters:
        console.print("\n[green]✅ No duplicate identities found![/]")
        return

    console.print("\n[bold]Duplicate Clusters[/]")
    for cluster in report.clusters[:max_clusters]:
        c = cluster.canonical
        console.print(
            f"\n  [bold]{escape(c.name)}[/] <{escape(c.email)}> [dim]({c.commits} commits)[/]",
            highlight=False,
        )
        console.print(f"  [dim]└─ {cluster.reason}[/]", highlight=False)
        for alias in cluster.aliases:
            pct = round(alias.confidence * 100)
            console.print(
                f"     [yellow]→[/] {escape(alias.name)} <{escape(alias.email)}> "
                f"[dim]({alias.commits} commits, {pct}% match)[/]",
                highlight=False,
            )

    remaining = len(report.clusters) - max_clusters
    if remaining > 0:
        console.print(f"\n[dim]...and {remaining} more clusters[/]")
