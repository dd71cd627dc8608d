from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class DataAccessConfig:
    latency_seconds: float = float(os.getenv("MOCK_LATENCY_SECONDS", "0.5"))
    fixtures_dir: Path = Path(
        os.getenv("FIXTURES_DIR", str(Path(__file__).resolve().parent.parent / "data"))
    )
    professionals_filename: str = "professionals.json"
    reviews_filename: str = "reviews.json"
    cache_ttl_seconds: float = float(os.getenv("FETCH_CACHE_TTL", "300"))
    enabled: bool = os.getenv("MOCK_DATA_ENABLED", "true").lower() not in ("0", "false", "no")

    @property
    def professionals_path(self) -> Path:
        return self.fixtures_dir / self.professionals_filename

    @property
    def reviews_path(self) -> Path:
        return self.fixtures_dir / self.reviews_filename


DEFAULT_DATA_ACCESS_CONFIG = DataAccessConfig()
