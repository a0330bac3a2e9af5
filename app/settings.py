import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    db_path: Path
    stats_window_seconds: int = 60
    log_level: str = "INFO"


def get_settings() -> Settings:
    data_dir = Path(os.getenv("LEDGER_DATA_DIR", str(Path.cwd() / ".data")))
    return Settings(
        data_dir=data_dir,
        db_path=data_dir / "ledger.sqlite",
        stats_window_seconds=int(os.getenv("LEDGER_STATS_WINDOW_SECONDS", "60")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
