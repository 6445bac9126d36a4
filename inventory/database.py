import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

# This file owns the on-disk store: one JSON array of product records,
# always read in full and overwritten in full.

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class StorageError(Exception):
    """Raised when the store could not be written."""


@dataclass
class LoadResult:
    products: List[Record] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _is_writable(path: Path) -> bool:
    if path.exists():
        return os.access(path, os.W_OK)
    parent = path.parent
    return parent.is_dir() and os.access(parent, os.W_OK)


class JsonFileStorage:
    def __init__(
        self,
        data_file: Path,
        policy: str = "fixed",
        fallback_dir: Optional[Path] = None,
        atomic_writes: bool = False,
    ):
        self.data_file = Path(data_file)
        self.policy = policy
        self.fallback_dir = Path(fallback_dir) if fallback_dir else Path(tempfile.gettempdir())
        self.atomic_writes = atomic_writes
        self.active_path: Optional[Path] = None

    def ensure_available(self) -> Path:
        # The fallback decision is made once; a missing file under the
        # resolved path is still recreated on later calls.
        if self.active_path is None:
            if self.policy == "fallback" and not _is_writable(self.data_file):
                self.active_path = self._switch_to_fallback()
            else:
                self.active_path = self.data_file

        if not self.active_path.exists():
            logger.info("Creating new data file at %s", self.active_path)
            self.active_path.parent.mkdir(parents=True, exist_ok=True)
            self.active_path.write_text(json.dumps([], indent=2), encoding="utf-8")
        return self.active_path

    def _switch_to_fallback(self) -> Path:
        target = self.fallback_dir / self.data_file.name
        logger.warning(
            "Data file %s is not writable, using %s for this process", self.data_file, target
        )
        target.parent.mkdir(parents=True, exist_ok=True)
        if self.data_file.is_file():
            target.write_bytes(self.data_file.read_bytes())
        elif not target.exists():
            target.write_text(json.dumps([], indent=2), encoding="utf-8")
        return target

    def load(self) -> LoadResult:
        try:
            path = self.ensure_available()
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error("Error reading data file %s: %s", self.active_path or self.data_file, e)
            return LoadResult(error=str(e))

        if not isinstance(data, list):
            msg = f"expected a JSON array, got {type(data).__name__}"
            logger.error("Error reading data file %s: %s", path, msg)
            return LoadResult(error=msg)
        return LoadResult(products=data)

    def save(self, products: List[Record]) -> None:
        payload = json.dumps(products, indent=2)
        try:
            path = self.ensure_available()
            if self.atomic_writes:
                self._replace(path, payload)
            else:
                path.write_text(payload, encoding="utf-8")
        except OSError as e:
            logger.error("Error writing data file %s: %s", self.active_path or self.data_file, e)
            raise StorageError("Failed to save data.") from e

    def _replace(self, path: Path, payload: str) -> None:
        fd, tmp_path = tempfile.mkstemp(prefix=".inventory_", suffix=".json", dir=str(path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, path)
        except OSError:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
