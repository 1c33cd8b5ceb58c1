import os
from pathlib import Path

from .loader import section

_DEFAULT_SQLITE_PATH = Path("data") / "rollcall.db"


class Storage:
    def __init__(self, config: dict | None = None) -> None:
        storage_cfg = section(config, "storage")
        self.SQL_DB_PATH: str = str(
            storage_cfg.get("sql_db_path", os.getenv("SQL_DB_PATH", str(_DEFAULT_SQLITE_PATH)))
        )
