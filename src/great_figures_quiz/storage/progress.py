"""User progress persistence (JSON + fcntl.flock + atomic write)."""

import fcntl
import json
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import structlog
from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from ..errors import ProgressSaveError
from ..models.progress import UserProgress

logger = structlog.get_logger()

EXPORT_KEYS = frozenset(to_camel(name) for name in UserProgress.model_fields)


class ProgressStore:
    """Single-document store for the installation's UserProgress record.

    Load and save failures are logged and reported as "absent" / False rather
    than raised, so callers never see a half-written record. ``transaction``
    is the exception: its caller's changes are lost on a failed write, so it
    raises ``ProgressSaveError``.

    Args:
        path: JSON file holding the record.
    """

    def __init__(self, path: Path):
        self.path = path

    def load(self) -> UserProgress | None:
        if not self.path.exists():
            return None
        try:
            with open(self.path, encoding="utf-8") as f:
                fcntl.flock(f, fcntl.LOCK_SH)
                try:
                    data = json.load(f)
                finally:
                    fcntl.flock(f, fcntl.LOCK_UN)
            return UserProgress.model_validate(data)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.error("progress_load_failed", path=str(self.path), error=str(e))
            return None

    def save(self, progress: UserProgress) -> bool:
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", dir=self.path.parent, delete=False, suffix=".json", encoding="utf-8"
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(progress.model_dump_json(by_alias=True, indent=2))
            os.replace(tmp_name, self.path)
        except OSError as e:
            logger.error("progress_save_failed", path=str(self.path), error=str(e))
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            return False
        return True

    def initialize(self) -> UserProgress:
        """Return the stored record, persisting a default one when absent."""
        progress = self.load()
        if progress is None:
            progress = UserProgress()
            self.save(progress)
            logger.info("progress_initialized", path=str(self.path))
        return progress

    @contextmanager
    def transaction(self, create_missing: bool = False) -> Iterator[UserProgress | None]:
        """Read the record once, let the caller mutate it, write it once.

        Yields None when no record exists and `create_missing` is False; nothing
        is written in that case. If the block raises, nothing is written.

        Raises:
            ProgressSaveError: If the mutated record could not be written.
        """
        progress = self.load()
        if progress is None:
            if not create_missing:
                yield None
                return
            progress = UserProgress()
        yield progress
        if not self.save(progress):
            raise ProgressSaveError(f"Could not write progress to {self.path}")

    def export_data(self) -> str | None:
        """Serialize the stored record as pretty JSON, or None when absent."""
        progress = self.load()
        if progress is None:
            return None
        return progress.model_dump_json(by_alias=True, indent=2)

    def import_data(self, raw: str | bytes) -> bool:
        """Replace the stored record with `raw` after validating it in full.

        The document must carry exactly the exported top-level keys. Malformed
        input leaves the existing record untouched.
        """
        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.warning("progress_import_rejected", reason="invalid json", error=str(e))
            return False
        if not isinstance(data, dict) or set(data) != EXPORT_KEYS:
            logger.warning(
                "progress_import_rejected",
                reason="unexpected keys",
                keys=sorted(data) if isinstance(data, dict) else None,
            )
            return False
        try:
            progress = UserProgress.model_validate(data)
        except ValidationError as e:
            logger.warning("progress_import_rejected", reason="invalid record", errors=e.error_count())
            return False
        if not self.save(progress):
            return False
        logger.info("progress_imported", level=progress.level, badges=len(progress.badges))
        return True

    def reset(self) -> UserProgress:
        progress = UserProgress()
        self.save(progress)
        logger.info("progress_reset", path=str(self.path))
        return progress
