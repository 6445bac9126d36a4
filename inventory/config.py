import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

# Settings are read once from the environment and handed to create_app().

DEFAULT_DATA_FILE = Path(__file__).resolve().parent.parent / "data.json"
STORAGE_POLICIES = ("fixed", "fallback")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    data_file: Path = DEFAULT_DATA_FILE
    storage_policy: str = "fixed"
    fallback_dir: Optional[Path] = None
    atomic_writes: bool = False
    mask_read_failures: bool = True
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    host: str = "0.0.0.0"
    port: int = 3001
    log_level: str = "INFO"

    def __post_init__(self):
        if self.storage_policy not in STORAGE_POLICIES:
            raise ValueError(
                f"unknown storage policy {self.storage_policy!r}, expected one of {STORAGE_POLICIES}"
            )

    @classmethod
    def from_env(cls) -> "Settings":
        fallback_dir = os.environ.get("INVENTORY_FALLBACK_DIR")
        origins = os.environ.get("INVENTORY_CORS_ORIGINS", "*")
        return cls(
            data_file=Path(os.environ.get("INVENTORY_DATA_FILE", str(DEFAULT_DATA_FILE))),
            storage_policy=os.environ.get("INVENTORY_STORAGE_POLICY", "fixed").strip().lower(),
            fallback_dir=Path(fallback_dir) if fallback_dir else None,
            atomic_writes=_env_bool("INVENTORY_ATOMIC_WRITES", False),
            mask_read_failures=_env_bool("INVENTORY_MASK_READ_FAILURES", True),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            host=os.environ.get("INVENTORY_HOST", "0.0.0.0"),
            port=int(os.environ.get("INVENTORY_PORT", 3001)),
            log_level=os.environ.get("INVENTORY_LOG_LEVEL", "INFO").upper(),
        )
