"""
Local content stores for encrypted post bundles.

Stores only ever see the serialized bundle; keys never reach them.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from pydantic import ValidationError

from humint.common.config import Config
from humint.common.exceptions import MalformedInput, StoreError
from humint.common.models import PostBundle

logger = logging.getLogger(__name__)

_POST_ID_RE = re.compile(r"^[A-Za-z0-9_-][A-Za-z0-9_.-]{0,127}$")


def validate_post_id(post_id: str) -> str:
    if not isinstance(post_id, str) or not _POST_ID_RE.match(post_id):
        msg = f"Invalid post id: {post_id!r}"
        raise MalformedInput(msg)
    return post_id


class FileContentStore:
    """One JSON file per post under ``base_dir``."""

    def __init__(self, base_dir: Path | None = None):
        self.base_dir = base_dir or Config().STORE_DIR

    def _path(self, post_id: str) -> Path:
        return self.base_dir / f"{validate_post_id(post_id)}.json"

    def put(self, post_id: str, bundle: PostBundle) -> None:
        """Save a bundle, replacing any previous one with the same id."""
        path = self._path(post_id)
        self.base_dir.mkdir(parents=True, exist_ok=True)
        with path.open("w") as f:
            f.write(bundle.model_dump_json())
        logger.debug("Stored post %s at %s", post_id, path)

    def get(self, post_id: str) -> PostBundle | None:
        """Load a bundle, or None when no such post exists."""
        path = self._path(post_id)
        try:
            with path.open() as f:
                content = f.read()
        except FileNotFoundError:
            return None
        try:
            return PostBundle.model_validate_json(content)
        except ValidationError as err:
            msg = f"Corrupt bundle for post {post_id}"
            raise StoreError(msg) from err

    def list_ids(self) -> list[str]:
        if not self.base_dir.exists():
            return []
        return sorted(p.stem for p in self.base_dir.glob("*.json"))


class MemoryContentStore:
    """Dict-backed store for tests and embedding."""

    def __init__(self) -> None:
        self._bundles: dict[str, str] = {}

    def put(self, post_id: str, bundle: PostBundle) -> None:
        self._bundles[validate_post_id(post_id)] = bundle.model_dump_json()

    def get(self, post_id: str) -> PostBundle | None:
        raw = self._bundles.get(validate_post_id(post_id))
        if raw is None:
            return None
        return PostBundle.model_validate_json(raw)

    def list_ids(self) -> list[str]:
        return sorted(self._bundles)
