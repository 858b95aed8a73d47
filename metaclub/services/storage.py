import logging
import random
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, List, Optional

from sqlmodel import Session, select, col

from ..config import UPLOAD_DIR, UPLOAD_URL_PREFIX
from ..models import Team

logger = logging.getLogger(__name__)


@dataclass
class StoredFile:
    path: Path
    url: str


class UploadStore:
    """Payment screenshots kept on local disk and served under a public URL prefix."""

    def __init__(self, directory: Path = UPLOAD_DIR, url_prefix: str = UPLOAD_URL_PREFIX):
        self.directory = Path(directory)
        self.url_prefix = url_prefix.rstrip("/")

    def _unique_name(self, original_name: Optional[str]) -> str:
        suffix = Path(original_name or "").suffix
        return f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}{suffix}"

    def save(self, stream: BinaryIO, original_name: Optional[str]) -> StoredFile:
        """Write an uploaded stream to disk and return where it lives."""
        self.directory.mkdir(parents=True, exist_ok=True)
        name = self._unique_name(original_name)
        path = self.directory / name
        with open(path, "wb") as out:
            shutil.copyfileobj(stream, out)
        logger.info("Stored upload %s", path.name)
        return StoredFile(path=path, url=f"{self.url_prefix}/{name}")

    def delete(self, stored: Optional[StoredFile]) -> None:
        """Remove a stored file. Best-effort: a failure is logged, not raised."""
        if stored is None:
            return
        try:
            stored.path.unlink(missing_ok=True)
            logger.info("Removed upload %s", stored.path.name)
        except OSError as e:
            logger.error("Could not remove upload %s: %s", stored.path, e)

    def url_for(self, path: Path) -> str:
        return f"{self.url_prefix}/{path.name}"

    def list_files(self) -> List[Path]:
        if not self.directory.exists():
            return []
        return sorted(p for p in self.directory.iterdir() if p.is_file())


def sweep_orphan_uploads(db: Session, store: UploadStore, dry_run: bool = False) -> List[Path]:
    """
    Delete uploaded files that no team row references.

    A crash between writing the screenshot and committing (or between a
    rollback and the cleanup) leaves such files behind.
    """
    referenced = set(
        db.exec(select(Team.screenshot_path).where(col(Team.screenshot_path).is_not(None))).all()
    )

    orphans = [path for path in store.list_files() if store.url_for(path) not in referenced]
    for path in orphans:
        if dry_run:
            logger.info("Orphan upload (dry run): %s", path.name)
            continue
        store.delete(StoredFile(path=path, url=store.url_for(path)))

    return orphans
