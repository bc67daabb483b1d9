"""Git integration for precondition checks."""

from .status import GitStatusChecker, WorkingTreeStatus

__all__ = ["GitStatusChecker", "WorkingTreeStatus"]
