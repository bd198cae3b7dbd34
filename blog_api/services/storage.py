"""Filesystem storage for uploaded avatars and post thumbnails."""

import logging
import shutil
import uuid
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import BinaryIO

from fastapi import UploadFile
from sqlalchemy.orm import Session

from blog_api.errors import InternalError

logger = logging.getLogger(__name__)


@dataclass
class UploadedAsset:
    """A multipart file part that has a size and can be persisted to a path."""

    name: str
    size: int
    source: BinaryIO

    @classmethod
    def from_upload(cls, upload: UploadFile) -> "UploadedAsset":
        size = upload.size
        if size is None:
            upload.file.seek(0, 2)
            size = upload.file.tell()
        upload.file.seek(0)
        return cls(name=upload.filename or "upload", size=size, source=upload.file)

    def move(self, destination: Path) -> None:
        """Write the asset's bytes to ``destination``."""
        self.source.seek(0)
        with open(destination, "wb") as out:
            shutil.copyfileobj(self.source, out)


def generate_filename(original: str) -> str:
    """Build ``{base}_{uuid}.{ext}`` from a client supplied filename.

    The base is everything before the first dot and the extension everything
    after the last one. Directory components are dropped.
    """
    name = PurePath(original.replace("\\", "/")).name or "upload"
    parts = name.split(".")
    base = parts[0] or "upload"
    suffix = uuid.uuid4().hex
    if len(parts) == 1:
        return f"{base}_{suffix}"
    return f"{base}_{suffix}.{parts[-1]}"


class FileStore:
    """Directory of uploaded assets addressed by generated filenames."""

    def __init__(self, root: str | Path):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def path_for(self, filename: str) -> Path:
        return self.root / PurePath(filename).name

    def exists(self, filename: str) -> bool:
        return self.path_for(filename).is_file()

    def save(self, asset: UploadedAsset) -> str:
        """Persist an asset under a fresh unique name and return that name."""
        filename = generate_filename(asset.name)
        try:
            asset.move(self.path_for(filename))
        except OSError as e:
            logger.error(f"Failed to store upload {asset.name!r}: {e}")
            raise InternalError("Could not store uploaded file") from e
        logger.info(f"Stored upload {asset.name!r} as {filename} ({asset.size} bytes)")
        return filename

    def delete(self, filename: str) -> None:
        """Remove an asset. Raises ``OSError`` if it cannot be removed."""
        self.path_for(filename).unlink()

    def discard(self, filename: str | None) -> bool:
        """Remove an asset, logging instead of raising on failure."""
        if not filename:
            return False
        try:
            self.delete(filename)
        except OSError as e:
            logger.warning(f"Could not delete asset {filename}: {e}")
            return False
        return True

    def commit_with_asset(self, db: Session, filename: str) -> None:
        """Commit ``db``, removing a freshly stored asset again if the commit fails."""
        try:
            db.commit()
        except Exception:
            db.rollback()
            self.discard(filename)
            raise
