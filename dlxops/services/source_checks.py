"""
Static checks over the web app's source tree.

These run without Firestore: they confirm a fix landed by looking for
files and substrings in the frontend sources.
"""
from __future__ import annotations

import hashlib
import os
from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence


@dataclass
class CheckResult:
    name: str
    passed: bool
    detail: str = ""


@dataclass
class SourceCheck:
    """
    One assertion about a source file.

    kind:
      exists        - the file is present
      contains      - every pattern occurs in the file
      not_contains  - no pattern occurs in the file
      count_at_most - patterns[0] occurs at most max_count times
    """
    name: str
    path: str
    kind: str = "exists"
    patterns: List[str] = field(default_factory=list)
    max_count: int = 0

    def run(self, root: str) -> CheckResult:
        target = Path(root) / self.path
        if self.kind == "exists":
            return CheckResult(self.name, target.is_file(), self.path)
        if not target.is_file():
            return CheckResult(self.name, False, f"{self.path} not found")

        content = target.read_text(encoding="utf-8", errors="replace")
        if self.kind == "contains":
            missing = [p for p in self.patterns if p not in content]
            return CheckResult(self.name, not missing, f"missing: {missing}" if missing else "")
        if self.kind == "not_contains":
            present = [p for p in self.patterns if p in content]
            return CheckResult(self.name, not present, f"present: {present}" if present else "")
        if self.kind == "count_at_most":
            count = content.count(self.patterns[0]) if self.patterns else 0
            return CheckResult(self.name, count <= self.max_count, f"{count} occurrences (max {self.max_count})")
        raise ValueError(f"Unknown check kind: {self.kind}")


def run_checks(checks: Iterable[SourceCheck], root: str) -> List[CheckResult]:
    return [check.run(root) for check in checks]


@dataclass
class DuplicateReport:
    remaining_duplicates: List[str] = field(default_factory=list)
    missing_canonical: List[str] = field(default_factory=list)
    stale_imports: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def clean(self) -> bool:
        return not (self.remaining_duplicates or self.missing_canonical or self.stale_imports)


def check_duplicates(
    root: str,
    duplicates: Sequence[str],
    canonical: Sequence[str],
    files_to_scan: Sequence[str] = (),
) -> DuplicateReport:
    """Report leftover duplicate files and references to them. Nothing is deleted."""
    base = Path(root)
    report = DuplicateReport()
    report.remaining_duplicates = [p for p in duplicates if (base / p).is_file()]
    report.missing_canonical = [p for p in canonical if not (base / p).is_file()]

    # A duplicate sharing its stem with a canonical file can only be told apart by extension
    canonical_stems = {Path(p).stem for p in canonical}
    dup_names = [
        Path(p).name if Path(p).stem in canonical_stems else Path(p).stem
        for p in duplicates
    ]
    for rel in files_to_scan:
        target = base / rel
        if not target.is_file():
            continue
        content = target.read_text(encoding="utf-8", errors="replace")
        hits = [name for name in dup_names if name in content]
        if hits:
            report.stale_imports[rel] = hits
    return report


def _file_digest(path: Path, chunk_size: int = 65536) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            h.update(chunk)
    return h.hexdigest()


def find_duplicate_files(
    root: str,
    extensions: Optional[Sequence[str]] = None,
    skip_dirs: Sequence[str] = ("node_modules", ".git", "dist", "build"),
) -> List[List[str]]:
    """Group files under root with identical content. Only groups of two or more are returned."""
    by_digest: Dict[str, List[str]] = defaultdict(list)
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in skip_dirs)
        for filename in sorted(filenames):
            if extensions and not filename.endswith(tuple(extensions)):
                continue
            path = Path(dirpath) / filename
            by_digest[_file_digest(path)].append(str(path.relative_to(root)))
    return [paths for paths in by_digest.values() if len(paths) > 1]
