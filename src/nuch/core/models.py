"""Pydantic models for the publish/delete transaction engine.

These models define the data handed across the engine's boundaries:
- WorkingArea / Collection: resolved directories from configuration
- SelectedItem: the file chosen for a single invocation
- StagedFile / BackupRecord: per-transaction bookkeeping
- TransactionOutcome: what publish() and delete() return

All models use Pydantic v2 for validation and serialization.
"""

from pathlib import Path
from typing import Literal

from pydantic import (
    BaseModel,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)


class WorkingArea(BaseModel):
    """Local staging tree where drafts and their media originate.

    Attributes:
        files: Directory holding draft content files
        images: Optional directory holding draft media assets
    """

    files: Path
    images: Path | None = None

    model_config = {"frozen": True}


class Collection(BaseModel):
    """A named publishing target (content directory plus optional images).

    Attributes:
        name: Unique, non-empty collection name
        files: Directory content files are published into
        images: Optional directory media assets are published into
    """

    name: str
    files: Path
    images: Path | None = None

    model_config = {"frozen": True}

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("collection name cannot be empty")
        return value


class SelectedItem(BaseModel):
    """The single file an invocation acts upon.

    Attributes:
        path: Existing regular file with a non-empty name and stem
    """

    path: Path

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_path(self) -> "SelectedItem":
        if not self.path.name or not self.path.stem:
            raise ValueError(f"invalid file name: {self.path}")
        if not self.path.is_file():
            raise ValueError(f"selected file does not exist: {self.path}")
        return self

    @property
    def filename(self) -> str:
        return self.path.name

    @property
    def stem(self) -> str:
        return self.path.stem


class StagedFile(BaseModel):
    """Record of a single copy performed during a transaction."""

    source_path: Path
    dest_path: Path


class BackupRecord(BaseModel):
    """A preserved copy of a file that is about to be deleted."""

    original_path: Path
    backup_path: Path


class TransactionOutcome(BaseModel):
    """Result of a publish or delete invocation.

    Attributes:
        action: Which workflow produced the outcome
        status: Final state; ``aborted`` means the operator declined and the
            filesystem was rolled back (not an error)
        filename: Name of the acted-upon file
        paths: Staged destination paths (publish) or the deletion set (delete)
        working_backups: Files copied into the working area by delete
    """

    action: Literal["publish", "delete"]
    status: Literal["published", "deleted", "aborted"]
    filename: str
    paths: list[Path] = Field(default_factory=list)
    working_backups: list[Path] = Field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.status != "aborted"

    @field_serializer("paths", "working_backups")
    def serialize_paths(self, paths: list[Path]) -> list[str]:
        """Serialize paths to strings for JSON."""
        return [str(p) for p in paths]


class AppConfig(BaseModel):
    """Resolved application configuration.

    Attributes:
        working: The working area
        collections: Configured publishing targets (at least one, unique names)
    """

    working: WorkingArea
    collections: list[Collection]

    @field_validator("collections")
    @classmethod
    def validate_collections(cls, value: list[Collection]) -> list[Collection]:
        if not value:
            raise ValueError("at least one collection must be configured")
        seen: set[str] = set()
        for collection in value:
            if collection.name in seen:
                raise ValueError(f"duplicate collection name: {collection.name}")
            seen.add(collection.name)
        return value
