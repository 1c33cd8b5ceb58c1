import logging
import os
from typing import List

from .loader import section

logger = logging.getLogger(__name__)


def _split_ids(raw: str) -> List[int]:
    return [int(rid.strip()) for rid in raw.split(",") if rid.strip()]


class Core:
    def __init__(self, config: dict | None = None) -> None:
        discord_cfg = section(config, "discord")

        token_env = str(discord_cfg.get("token_env", "DISCORD_API_TOKEN"))
        self.DISCORD_API_TOKEN: str | None = os.getenv(token_env)

        self.COMMAND_PREFIX: str = str(
            discord_cfg.get("command_prefix", os.getenv("COMMAND_PREFIX", "/"))
        )

        role_ids_cfg = discord_cfg.get("manager_role_ids")
        if role_ids_cfg:
            self.MANAGER_ROLE_IDS: List[int] = [int(rid) for rid in role_ids_cfg]
        else:
            self.MANAGER_ROLE_IDS = _split_ids(os.getenv("MANAGER_ROLE_IDS", ""))

        required = [
            ("DISCORD_API_TOKEN", self.DISCORD_API_TOKEN),
            ("COMMAND_PREFIX", self.COMMAND_PREFIX),
        ]
        missing = [name for name, val in required if not val]
        if missing:
            raise ValueError(f"Missing environment variables: {', '.join(missing)}")

        if not self.MANAGER_ROLE_IDS:
            logger.info("No MANAGER_ROLE_IDS configured; only channel moderators can run calls.")
