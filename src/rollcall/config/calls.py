import os

from .loader import section


class Calls:
    def __init__(self, config: dict | None = None) -> None:
        calls_cfg = section(config, "calls")
        # Seconds to wait before deleting the invoking command message
        self.COMMAND_DELETE_DELAY: float = float(
            calls_cfg.get("command_delete_delay", os.getenv("COMMAND_DELETE_DELAY", "0.5"))
        )
        # Seconds to wait before deleting a display message replaced by a refresh
        self.REPLACED_DELETE_DELAY: float = float(
            calls_cfg.get("replaced_delete_delay", os.getenv("REPLACED_DELETE_DELAY", "0.5"))
        )
