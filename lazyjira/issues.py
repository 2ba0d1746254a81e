"""Local issue store backed by a JSON file.

Stands in for the remote tracker: loads issues once, hands out descriptions,
and writes saved descriptions back to the same file.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from .errors import IssueStoreError

logger = logging.getLogger(__name__)


@dataclass
class Issue:
    key: str
    summary: str = ""
    status: str = ""
    description: str = ""
    assignee: str = ""


def _coerce_str(value: object) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def parse_issues(data: object) -> list[Issue]:
    """Build issues from ``{"issues": [...]}`` or a bare list.

    Entries without a non-empty string ``key`` are rejected.
    """
    raw_items = data.get("issues") if isinstance(data, dict) else data
    if not isinstance(raw_items, list):
        raise IssueStoreError("issues file must contain a list of issues")

    issues: list[Issue] = []
    seen: set[str] = set()
    for index, raw in enumerate(raw_items):
        if not isinstance(raw, dict):
            raise IssueStoreError(f"issue #{index} is not an object")
        key = raw.get("key")
        if not isinstance(key, str) or not key.strip():
            raise IssueStoreError(f"issue #{index} has no key")
        key = key.strip()
        if key in seen:
            raise IssueStoreError(f"duplicate issue key: {key}")
        seen.add(key)
        issues.append(
            Issue(
                key=key,
                summary=_coerce_str(raw.get("summary")),
                status=_coerce_str(raw.get("status")),
                description=_coerce_str(raw.get("description")),
                assignee=_coerce_str(raw.get("assignee")),
            )
        )
    return issues


class IssueStore:
    """In-memory issue list with write-through description saves."""

    def __init__(self, issues: list[Issue], path: Path | None = None) -> None:
        self.issues = issues
        self.path = path
        self._by_key = {issue.key: issue for issue in issues}

    @classmethod
    def load(cls, path: Path) -> "IssueStore":
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise IssueStoreError(f"issues file not found: {path}") from exc
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise IssueStoreError(f"cannot read issues file {path}: {exc}") from exc
        issues = parse_issues(data)
        logger.info("Loaded %d issues from %s", len(issues), path)
        return cls(issues, path=path)

    def get(self, key: str) -> Issue | None:
        return self._by_key.get(key)

    def description(self, key: str) -> str:
        """Return the plain-text description, or ``""`` for unknown keys."""
        issue = self._by_key.get(key)
        return issue.description if issue is not None else ""

    def save_description(self, key: str, description: str) -> None:
        issue = self._by_key.get(key)
        if issue is None:
            raise IssueStoreError(f"unknown issue: {key}")
        previous = issue.description
        issue.description = description
        try:
            self.flush()
        except IssueStoreError:
            issue.description = previous
            raise
        logger.info("Saved description for %s", key)

    def flush(self) -> None:
        if self.path is None:
            return
        payload = {"issues": [asdict(issue) for issue in self.issues]}
        try:
            self.path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
        except OSError as exc:
            raise IssueStoreError(f"cannot write issues file {self.path}: {exc}") from exc
