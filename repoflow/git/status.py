"""Git status operations."""

from dataclasses import dataclass, field
from pathlib import Path

from repoflow.git.runner import run_git, GitResult

# Unmerged XY pairs from `git status --porcelain`
CONFLICT_CODES = {"DD", "AU", "UD", "UA", "DU", "AA", "UU"}


@dataclass
class GitStatus:
    """Working tree status grouped by kind of change."""
    conflicted: list[str] = field(default_factory=list)
    not_added: list[str] = field(default_factory=list)
    created: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    modified: list[str] = field(default_factory=list)
    renamed: list[str] = field(default_factory=list)  # Destination paths

    @property
    def has_pending(self) -> bool:
        """True if anything needs staging or committing."""
        return bool(
            self.not_added or self.created or self.deleted
            or self.modified or self.renamed
        )


def parse_status(output: str) -> GitStatus:
    """Parse `git status --porcelain -z` output.

    -z format: "XY path\\0", renames and copies are "XY dest\\0source\\0".
    """
    status = GitStatus()
    entries = output.split('\0')
    i = 0
    while i < len(entries):
        entry = entries[i]
        i += 1
        if len(entry) < 4:
            continue

        code = entry[:2]
        path = entry[3:]
        x, y = code[0], code[1]

        if code in CONFLICT_CODES:
            status.conflicted.append(path)
        elif code == "??":
            status.not_added.append(path)
        elif x in ('R', 'C'):
            # Next entry is the source path
            i += 1
            status.renamed.append(path)
        elif x == 'A':
            status.created.append(path)
        elif 'D' in (x, y):
            status.deleted.append(path)
        elif x in ('M', 'T') or y in ('M', 'T'):
            status.modified.append(path)

    return status


def get_status(worktree: Path) -> tuple[GitResult, GitStatus]:
    """Get parsed status for a worktree."""
    result = run_git(["status", "--porcelain", "-z"], worktree)
    if not result.success:
        return result, GitStatus()
    return result, parse_status(result.stdout)
