"""Working tree cleanliness check run before rewriting files."""

import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from ..consolidator_logging import get_logger


@dataclass
class WorkingTreeStatus:
    """Result of ``git status --porcelain``.

    Attributes:
        is_git_repo: Whether git could report on the project directory
        changed_entries: Porcelain lines of uncommitted changes
        error: Why git status was unavailable, if it was
    """

    is_git_repo: bool = True
    changed_entries: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def is_clean(self) -> bool:
        return not self.changed_entries


class GitStatusChecker:
    """Refuse to rewrite files over uncommitted changes unless forced.

    Example:
        checker = GitStatusChecker(project_path)
        if not checker.check_preconditions(force=False):
            sys.exit(4)
    """

    def __init__(self, project_path: Path | str | None = None, timeout: float = 30.0):
        self.project_path = Path(project_path or Path.cwd()).resolve()
        self.timeout = timeout
        self.logger = get_logger()

    def working_tree_status(self) -> WorkingTreeStatus:
        """Query git; never raises."""
        try:
            result = subprocess.run(
                ["git", "status", "--porcelain"],
                cwd=self.project_path,
                capture_output=True,
                text=True,
                check=True,
                timeout=self.timeout,
            )
        except subprocess.CalledProcessError as e:
            return WorkingTreeStatus(
                is_git_repo=False, error=(e.stderr or str(e)).strip()
            )
        except (FileNotFoundError, OSError, subprocess.TimeoutExpired) as e:
            return WorkingTreeStatus(is_git_repo=False, error=str(e))

        entries = [line for line in result.stdout.splitlines() if line.strip()]
        return WorkingTreeStatus(changed_entries=entries)

    def check_preconditions(self, force: bool = False) -> bool:
        """Return False when the tree has uncommitted changes and not forced.

        Projects outside git, or machines without git, always pass.
        """
        status = self.working_tree_status()
        if not status.is_git_repo:
            self.logger.debug(f"Git not available, skipping git status check: {status.error}")
            return True

        if not status.is_clean and not force:
            self.logger.debug(
                f"Git has {len(status.changed_entries)} uncommitted change(s); "
                "use --force to proceed anyway"
            )
            return False

        return True
