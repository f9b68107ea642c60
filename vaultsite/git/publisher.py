"""Git publishing utilities for exported sites."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import Callable, Iterable, Sequence

from ..logging import get_logger


class Publisher:
    """Clones the target repository and commits exported files into it."""

    def __init__(self, runner: Callable[..., str] | None = None) -> None:
        self._runner = runner or self._default_runner
        self.logger = get_logger("git")

    def clone(self, url: str, destination: Path) -> bool:
        """Clone ``url`` into ``destination`` unless a checkout is already there."""
        if (destination / ".git").exists():
            self.logger.info("Repository already cloned at %s", destination)
            return False
        destination.parent.mkdir(parents=True, exist_ok=True)
        self._run(["git", "clone", url, str(destination)], cwd=destination.parent)
        return True

    def commit(
        self,
        repo_path: str,
        files: Sequence[Path | str],
        *,
        message: str = "docs: export site via vaultsite",
    ) -> bool:
        """Stage the provided files and create a commit if changes exist."""
        repo = Path(repo_path)
        if not (repo / ".git").exists():
            return False

        relative_files = [self._to_relative(repo, Path(file)) for file in files]
        for rel in relative_files:
            self._run(["git", "add", rel], cwd=repo)

        status = self._run(["git", "status", "--porcelain"], cwd=repo, capture_output=True)
        if not status.strip():
            return False

        env = os.environ.copy()
        env.setdefault("GIT_AUTHOR_NAME", "vaultsite")
        env.setdefault("GIT_AUTHOR_EMAIL", "vaultsite@example.com")
        env.setdefault("GIT_COMMITTER_NAME", env["GIT_AUTHOR_NAME"])
        env.setdefault("GIT_COMMITTER_EMAIL", env["GIT_AUTHOR_EMAIL"])

        self._run(["git", "commit", "-m", message], cwd=repo, env=env)
        return True

    def publish(
        self,
        repo_path: str,
        files: Sequence[Path | str],
        *,
        message: str = "docs: export site via vaultsite",
        branch: str | None = None,
        push: bool = False,
    ) -> bool:
        """Commit the files, on ``branch`` when given, and optionally push."""
        repo = Path(repo_path)
        if not (repo / ".git").exists():
            self.logger.warning("%s is not a git checkout; skipping publish", repo)
            return False

        if branch:
            self._run(["git", "checkout", "-B", branch], cwd=repo)

        if not self.commit(repo_path, files, message=message):
            self.logger.info("No changes to publish in %s", repo)
            return False

        if push:
            push_cmd = ["git", "push", "-u", "origin", branch] if branch else ["git", "push"]
            self._run(push_cmd, cwd=repo)
        return True

    # ------------------------------------------------------------------
    # Helpers

    @staticmethod
    def _to_relative(repo: Path, file_path: Path) -> str:
        try:
            return file_path.relative_to(repo).as_posix()
        except ValueError:
            return file_path.as_posix()

    def _run(
        self,
        args: Iterable[str],
        *,
        cwd: Path,
        env: dict[str, str] | None = None,
        capture_output: bool = False,
    ) -> str:
        return self._runner(args, cwd=cwd, env=env, capture_output=capture_output)

    @staticmethod
    def _default_runner(
        args: Iterable[str],
        *,
        cwd: Path,
        env: dict[str, str] | None = None,
        capture_output: bool = False,
    ) -> str:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            env=env,
            check=True,
            text=True,
            capture_output=capture_output,
        )
        if capture_output:
            return completed.stdout
        return ""


__all__ = ["Publisher"]
