"""Release notes synthesized from git history.

Commit subjects since the last reachable tag are bucketed by their prefix
(``feat``, ``fix``, ``docs``/``chore``/...) and rendered into a fixed markdown
layout followed by a QA checklist. Git problems never fail the pipeline: a
history that cannot be read renders every section as ``- (none)``.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from enum import Enum
from typing import TYPE_CHECKING, Protocol

from shipkit.core.result import Err, Ok, Result
from shipkit.platform.files import atomic_write_text
from shipkit.release.config import DEFAULT_FALLBACK_DEPTH
from shipkit.release.errors import FilesystemError, HistoryUnavailable
from shipkit.release.model import ReleaseMetadata, WrittenNotes

if TYPE_CHECKING:
    from shipkit.git.repository import GitError
    from shipkit.output.console import ConsoleProtocol

__all__ = [
    "CATEGORY_RULES",
    "QA_CHECKLIST",
    "ChangeCategory",
    "ClassifiedHistory",
    "CommitRecord",
    "HistoryRange",
    "HistorySource",
    "classify",
    "classify_all",
    "collect_history",
    "render_release_notes",
    "synthesize_release_notes",
]


class ChangeCategory(Enum):
    FEATURES = "Features"
    FIXES = "Fixes"
    DOCS_AND_CHORES = "Docs and Chores"

    @property
    def heading(self) -> str:
        return f"## {self.value}"


# Checked in order; the first matching prefix wins.
CATEGORY_RULES: tuple[tuple[ChangeCategory, tuple[str, ...]], ...] = (
    (ChangeCategory.FEATURES, ("feat",)),
    (ChangeCategory.FIXES, ("fix",)),
    (ChangeCategory.DOCS_AND_CHORES, ("docs", "chore", "refactor", "perf", "test")),
)

QA_CHECKLIST: tuple[str, ...] = (
    "npm run lint",
    "npm run build",
    "npm run zip:web",
    "Smoke test title/new game/continue",
)

_NONE_PLACEHOLDER = "- (none)"


@dataclass(frozen=True, slots=True)
class CommitRecord:
    subject: str


class HistorySource(Protocol):
    """The slice of a git repository the change log needs."""

    def last_tag(self) -> str | None: ...

    def log_subjects(
        self, rev_range: str, *, max_count: int | None = None
    ) -> Result[list[str], GitError]: ...


@dataclass(frozen=True, slots=True)
class HistoryRange:
    """Revision range scanned for commits.

    ``last_tag`` set: ``{tag}..HEAD``. Otherwise the last ``depth`` commits.
    """

    last_tag: str | None
    depth: int = DEFAULT_FALLBACK_DEPTH

    @property
    def expression(self) -> str:
        if self.last_tag:
            return f"{self.last_tag}..HEAD"
        return f"HEAD~{self.depth}..HEAD"

    def describe(self) -> str:
        if self.last_tag:
            return f"{self.last_tag}..HEAD"
        return f"last {self.depth} commits"


def _empty_buckets() -> dict[ChangeCategory, list[CommitRecord]]:
    return {category: [] for category in ChangeCategory}


def _empty_records() -> list[CommitRecord]:
    return []


@dataclass
class ClassifiedHistory:
    """Commits bucketed by category.

    Subjects matching no prefix are kept apart in ``uncategorized`` but are
    rendered at the end of Docs and Chores.
    """

    buckets: dict[ChangeCategory, list[CommitRecord]] = field(default_factory=_empty_buckets)
    uncategorized: list[CommitRecord] = field(default_factory=_empty_records)

    def entries(self, category: ChangeCategory) -> list[CommitRecord]:
        records = list(self.buckets[category])
        if category is ChangeCategory.DOCS_AND_CHORES:
            records.extend(self.uncategorized)
        return records

    @property
    def total(self) -> int:
        return sum(len(v) for v in self.buckets.values()) + len(self.uncategorized)


def _match(
    subject: str, rules: Sequence[tuple[ChangeCategory, tuple[str, ...]]]
) -> ChangeCategory | None:
    lowered = subject.lower()
    for category, prefixes in rules:
        if any(lowered.startswith(prefix) for prefix in prefixes):
            return category
    return None


def classify(
    subject: str,
    rules: Sequence[tuple[ChangeCategory, tuple[str, ...]]] = CATEGORY_RULES,
) -> ChangeCategory:
    """Category for a commit subject; unmatched subjects land in Docs and Chores."""
    return _match(subject, rules) or ChangeCategory.DOCS_AND_CHORES


def classify_all(
    subjects: Iterable[str],
    rules: Sequence[tuple[ChangeCategory, tuple[str, ...]]] = CATEGORY_RULES,
) -> ClassifiedHistory:
    history = ClassifiedHistory()
    for subject in subjects:
        record = CommitRecord(subject=subject)
        category = _match(subject, rules)
        if category is None:
            history.uncategorized.append(record)
        else:
            history.buckets[category].append(record)
    return history


def collect_history(
    repo: HistorySource, *, depth: int = DEFAULT_FALLBACK_DEPTH
) -> tuple[HistoryRange, Result[list[str], HistoryUnavailable]]:
    """Determine the range and read its commit subjects.

    Without a tag, ``HEAD~depth`` does not resolve on shorter histories; in
    that case the log is read from HEAD capped at ``depth`` commits.
    """
    history_range = HistoryRange(last_tag=repo.last_tag(), depth=depth)

    result = repo.log_subjects(history_range.expression)
    if isinstance(result, Err) and history_range.last_tag is None:
        result = repo.log_subjects("HEAD", max_count=depth)

    match result:
        case Ok(subjects):
            return history_range, Ok(subjects)
        case Err(e):
            return history_range, Err(HistoryUnavailable(e.message))


def _section(category: ChangeCategory, records: list[CommitRecord]) -> list[str]:
    lines = [category.heading]
    if not records:
        lines.append(_NONE_PLACEHOLDER)
    else:
        lines.extend(f"- {r.subject}" for r in records)
    return lines


def render_release_notes(
    *,
    version: str,
    history_range: HistoryRange,
    history: ClassifiedHistory,
    today: date,
) -> str:
    lines: list[str] = [
        f"# Release Notes - v{version}",
        "",
        f"Date: {today.isoformat()}",
        "",
        f"Range: {history_range.describe()}",
    ]

    for category in ChangeCategory:
        lines.append("")
        lines.extend(_section(category, history.entries(category)))

    lines.append("")
    lines.append("## QA Checklist")
    lines.extend(f"- [ ] {item}" for item in QA_CHECKLIST)

    return "\n".join(lines) + "\n"


def synthesize_release_notes(
    metadata: ReleaseMetadata,
    repo: HistorySource,
    *,
    depth: int = DEFAULT_FALLBACK_DEPTH,
    today: date | None = None,
    console: ConsoleProtocol | None = None,
) -> Result[WrittenNotes, FilesystemError]:
    """Build the release notes and write them to ``metadata.notes_path``.

    Only a failed write is an error; unreadable history yields empty sections.
    """
    history_range, subjects = collect_history(repo, depth=depth)
    if isinstance(subjects, Err):
        if console is not None:
            console.warning(f"git history unavailable: {subjects.error.message}")
        lines: list[str] = []
    else:
        lines = subjects.value

    history = classify_all(lines)
    markdown = render_release_notes(
        version=metadata.version,
        history_range=history_range,
        history=history,
        today=today or datetime.now(UTC).date(),
    )

    path = metadata.notes_path
    try:
        atomic_write_text(path, markdown)
    except OSError as e:
        return Err(
            FilesystemError(
                f"failed to write release notes: {e.strerror or e}",
                path=path,
            )
        )

    if console is not None:
        console.info(f"Range: {history_range.describe()} ({history.total} commits)")
    return Ok(WrittenNotes(path=path, commit_count=history.total, markdown=markdown))
