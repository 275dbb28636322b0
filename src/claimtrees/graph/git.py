"""Version-control checks backing evidence validity."""
from __future__ import annotations

import logging
import os
import subprocess
from typing import Protocol, runtime_checkable

from claimtrees.config.constants import DEFAULT_GIT_BINARY, DEFAULT_GIT_TIMEOUT_SECONDS
from claimtrees.graph.errors import GitCheckError, GitTimeoutError


logger = logging.getLogger(__name__)


@runtime_checkable
class GitChecker(Protocol):
    """Answers "has this file changed since this commit?"."""

    def has_file_changed_since(
        self,
        commit: str,
        file_path: str,
        timeout: float | None = None,
    ) -> bool:
        """Return True if any commit after ``commit`` up to HEAD touched ``file_path``.

        Must raise ``GitCheckError`` instead of guessing when the commit is
        unknown, the path is outside a repository, or git cannot be run.
        """
        ...


class GitCommandChecker:
    """GitChecker that shells out to ``git log``.

    Every call runs git afresh; nothing is cached.
    """

    def __init__(
        self,
        git_binary: str = DEFAULT_GIT_BINARY,
        timeout: float | None = DEFAULT_GIT_TIMEOUT_SECONDS,
    ) -> None:
        self._git_binary = git_binary
        self._timeout = timeout

    @property
    def timeout(self) -> float | None:
        return self._timeout

    def build_command(self, commit: str, file_path: str) -> list[str]:
        return [self._git_binary, "log", "--oneline", f"{commit}..HEAD", "--", file_path]

    def has_file_changed_since(
        self,
        commit: str,
        file_path: str,
        timeout: float | None = None,
    ) -> bool:
        if not commit:
            raise GitCheckError("commit is required", commit=commit, file_path=file_path)
        if commit.startswith("-"):
            raise GitCheckError(
                f"invalid commit {commit!r}", commit=commit, file_path=file_path
            )

        effective_timeout = timeout if timeout is not None else self._timeout
        cmd = self.build_command(commit, file_path)
        cwd = os.path.dirname(file_path) or None
        logger.debug("Running %s (cwd=%s, timeout=%s)", cmd, cwd, effective_timeout)

        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=effective_timeout,
                check=True,
            )
        except subprocess.TimeoutExpired as exc:
            raise GitTimeoutError(
                f"git log timed out after {effective_timeout}s for {file_path}",
                commit=commit,
                file_path=file_path,
            ) from exc
        except subprocess.CalledProcessError as exc:
            stderr = (exc.stderr or "").strip()
            raise GitCheckError(
                f"git log failed for {file_path} at {commit}: {stderr or f'exit status {exc.returncode}'}",
                commit=commit,
                file_path=file_path,
                stderr=stderr,
            ) from exc
        except OSError as exc:
            # Missing git binary or missing working directory.
            raise GitCheckError(
                f"could not run git for {file_path}: {exc}",
                commit=commit,
                file_path=file_path,
            ) from exc

        return result.stdout.strip() != ""
