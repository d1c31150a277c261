from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True)
class VcsFacts:
    branches: list[str] = field(default_factory=list)
    current_branch: str | None = None
    commit_count: int = 0


class VcsFactsProvider(Protocol):
    def facts(self, repo_root: Path) -> VcsFacts: ...
