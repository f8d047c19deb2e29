"""Custom exceptions for nuch.

This module defines typed exceptions raised by the publish/delete transaction
engine and its collaborators. Every failure that happens after the filesystem
has been touched carries the outcome of the compensating action in
``rollback_failures``; those descriptions are appended to the message so the
operator sees both the original problem and anything left inconsistent.
"""

from pathlib import Path
from typing import Any


class NuchError(Exception):
    """Base exception for all nuch errors.

    Attributes:
        rollback_failures: Descriptions of compensating actions that failed
            while handling this error (empty when rollback was clean)
    """

    error_code = "nuch_error"

    def __init__(self, message: str, rollback_failures: list[str] | None = None) -> None:
        self.base_message = message
        self.rollback_failures: list[str] = list(rollback_failures or [])
        super().__init__(self._compose())

    def _compose(self) -> str:
        if not self.rollback_failures:
            return self.base_message
        return (
            f"{self.base_message}; rollback failures: "
            f"{'; '.join(self.rollback_failures)}"
        )

    def add_rollback_failures(self, failures: list[str]) -> "NuchError":
        """Append compensation failures without replacing the original error.

        Args:
            failures: Failure descriptions from a rollback or restore step

        Returns:
            The same exception, for ``raise exc.add_rollback_failures(...)``
        """
        if failures:
            self.rollback_failures.extend(failures)
            self.args = (self._compose(),)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for structured output."""
        result: dict[str, Any] = {
            "error": self.error_code,
            "message": self.base_message,
        }
        if self.rollback_failures:
            result["rollback_failures"] = list(self.rollback_failures)
        return result


class ConfigError(NuchError):
    """Raised when the config file is missing, unreadable or invalid."""

    error_code = "config_error"


class InvalidSelection(NuchError):
    """Raised when a selected path cannot be acted upon."""

    error_code = "invalid_selection"


class DestinationConflict(NuchError):
    """Raised when a copy target already exists.

    Destinations are never overwritten; a conflict aborts the transaction.

    Attributes:
        path: The destination path that already exists
    """

    error_code = "destination_conflict"

    def __init__(self, path: Path, rollback_failures: list[str] | None = None) -> None:
        self.path = Path(path)
        super().__init__(
            f"Destination already exists: {self.path}", rollback_failures
        )

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["path"] = str(self.path)
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={str(self.path)!r})"


class AssetConflict(DestinationConflict):
    """Raised when a media asset already exists at its copy target."""

    error_code = "asset_conflict"


class CopyFailure(NuchError):
    """Raised when copying a file fails with an I/O error.

    Attributes:
        src: File being copied
        dest: Intended destination path (or directory)
        reason: Text of the underlying OS error
    """

    error_code = "copy_failure"

    def __init__(
        self,
        src: Path,
        dest: Path,
        reason: str,
        rollback_failures: list[str] | None = None,
    ) -> None:
        self.src = Path(src)
        self.dest = Path(dest)
        self.reason = reason
        super().__init__(
            f"Failed to copy {self.src} to {self.dest}: {reason}", rollback_failures
        )

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result.update({"src": str(self.src), "dest": str(self.dest)})
        return result


class AssetCopyFailure(CopyFailure):
    """Raised when copying a media asset fails with an I/O error."""

    error_code = "asset_copy_failure"


class BackupFailure(NuchError):
    """Raised when files cannot be preserved in the temp backup directory."""

    error_code = "backup_failure"


class RemovalFailure(NuchError):
    """Raised when a file in the deletion set cannot be removed.

    Attributes:
        path: The file that could not be removed
        reason: Text of the underlying OS error
    """

    error_code = "removal_failure"

    def __init__(
        self, path: Path, reason: str, rollback_failures: list[str] | None = None
    ) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to remove {self.path}: {reason}", rollback_failures)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["path"] = str(self.path)
        return result


class VersionControlFailure(NuchError):
    """Raised when the git add/commit/push sequence fails.

    Attributes:
        step: The git step that failed (check, staged, add, commit, push)
        output: Diagnostic text captured from git
    """

    error_code = "version_control_failure"

    def __init__(
        self, step: str, output: str, rollback_failures: list[str] | None = None
    ) -> None:
        self.step = step
        self.output = output.strip()
        message = f"git {step} failed"
        if self.output:
            message += f": {self.output}"
        super().__init__(message, rollback_failures)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result.update({"step": self.step, "output": self.output})
        return result

    def __repr__(self) -> str:
        return f"VersionControlFailure(step={self.step!r}, output={self.output!r})"


class RollbackFailure(NuchError):
    """Raised when a rollback requested by the operator could not complete.

    Used on the abort path, where the operator asked for no trace to be left
    and that could not be honoured.
    """

    error_code = "rollback_failure"
