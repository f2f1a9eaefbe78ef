# src/scenario_catalog/config.py
from dataclasses import dataclass, asdict
import os
from typing import Dict, Any

from dotenv import load_dotenv

# a local .env may set any of the variables below; real env vars win
load_dotenv(override=False)

DEFAULT_ESTIMATED_TIME = 5

def _env_bool(name, default=False):
    v = os.getenv(name)
    if v is None: return default
    return str(v).strip().lower() in {"1","true","yes","y","on"}

@dataclass(frozen=True)
class Settings:
    # -------- General ----------
    catalog_path: str     = os.getenv("CATALOG_PATH", "")   # empty -> bundled sample catalog
    log_level: str        = os.getenv("LOG_LEVEL", "INFO")

    # -------- Normalizer -------
    default_estimated_time: int = int(os.getenv("DEFAULT_ESTIMATED_TIME", str(DEFAULT_ESTIMATED_TIME)))
    strict_load: bool     = _env_bool("STRICT_LOAD", False)

    # -------- Stats ------------
    stats_precision: int  = int(os.getenv("STATS_PRECISION", "1"))
    top_tags_limit: int   = int(os.getenv("TOP_TAGS_LIMIT", "10"))

    def __post_init__(self):
        if self.default_estimated_time <= 0:
            raise ValueError(f"DEFAULT_ESTIMATED_TIME must be a positive number of minutes, got {self.default_estimated_time}")
        if self.top_tags_limit < 0:
            raise ValueError(f"TOP_TAGS_LIMIT must be >= 0, got {self.top_tags_limit}")

    # helper: convert to dict (useful for logging)
    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_overrides(**kwargs) -> "Settings":
        """
        Build Settings and apply runtime overrides (e.g., parsed CLI flags).
        Only keys that match fields will be overridden.
        """
        base = Settings()
        current = base.to_dict()
        current.update({k: v for k, v in kwargs.items() if k in current and v is not None})
        # rebuild frozen dataclass with updates
        return Settings(**current)  # type: ignore[arg-type]
