import subprocess
from pathlib import Path

from attention_editor.config import get_settings
from attention_editor.core.errors import VcsError
from attention_editor.core.ports.vcs import VcsFacts


class GitCliFactsProvider:
    """Read branch and commit facts by shelling out to ``git``.

    Implements the ``VcsFactsProvider`` protocol.
    """

    def __init__(self, git_binary: str | None = None, timeout: float | None = None) -> None:
        settings = get_settings()
        self._git = git_binary or settings.git_binary
        self._timeout = timeout if timeout is not None else settings.git_timeout

    def _run(self, repo_root: Path, *args: str) -> subprocess.CompletedProcess[str]:
        try:
            return subprocess.run(
                [self._git, "-C", str(repo_root), *args],
                check=False,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except FileNotFoundError as exc:
            raise VcsError(f"git executable not found: {self._git}") from exc
        except subprocess.TimeoutExpired as exc:
            raise VcsError(f"git {args[0]} timed out after {self._timeout}s") from exc

    def _checked(self, repo_root: Path, *args: str) -> str:
        result = self._run(repo_root, *args)
        if result.returncode != 0:
            raise VcsError(f"git {' '.join(args)} failed: {result.stderr.strip()}")
        return result.stdout.strip()

    def branches(self, repo_root: Path) -> list[str]:
        output = self._checked(repo_root, "for-each-ref", "--format=%(refname:short)", "refs/heads")
        return [line for line in output.splitlines() if line]

    def current_branch(self, repo_root: Path) -> str | None:
        result = self._run(repo_root, "symbolic-ref", "--quiet", "--short", "HEAD")
        if result.returncode != 0:
            return None  # detached HEAD
        return result.stdout.strip() or None

    def commit_count(self, repo_root: Path) -> int:
        head = self._run(repo_root, "rev-parse", "--verify", "--quiet", "HEAD")
        if head.returncode != 0:
            return 0  # no commits yet
        output = self._checked(repo_root, "rev-list", "--count", "HEAD")
        try:
            return int(output)
        except ValueError as exc:
            raise VcsError(f"Unexpected commit count from git: {output!r}") from exc

    def facts(self, repo_root: Path) -> VcsFacts:
        toplevel = self._checked(repo_root, "rev-parse", "--show-toplevel")
        if Path(toplevel).resolve() != repo_root.resolve():
            raise VcsError(f"{repo_root} is not the top level of a git repository (found {toplevel})")
        return VcsFacts(
            branches=self.branches(repo_root),
            current_branch=self.current_branch(repo_root),
            commit_count=self.commit_count(repo_root),
        )
