import pytest

from rollcall.config.calls import Calls
from rollcall.config.core import Core
from rollcall.config.loader import load_raw_config, section
from rollcall.config.storage import Storage


def test_toml_values_take_precedence(tmp_path, monkeypatch):
    cfg_file = tmp_path / "config.toml"
    cfg_file.write_text(
        "[rollcall.discord]\n"
        'command_prefix = "!"\n'
        "manager_role_ids = [5, 6]\n"
        "[rollcall.storage]\n"
        'sql_db_path = "calls.db"\n'
        "[rollcall.calls]\n"
        "command_delete_delay = 2\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("ROLLCALL_CONFIG", str(cfg_file))

    raw = load_raw_config()
    core = Core(raw)

    assert core.COMMAND_PREFIX == "!"
    assert core.MANAGER_ROLE_IDS == [5, 6]
    assert Storage(raw).SQL_DB_PATH == "calls.db"
    assert Calls(raw).COMMAND_DELETE_DELAY == 2.0


def test_missing_file_falls_back_to_env(tmp_path, monkeypatch):
    monkeypatch.setenv("MANAGER_ROLE_IDS", "1, 2,")
    raw = load_raw_config(tmp_path / "absent.toml")

    assert raw == {}
    assert section(raw, "discord") == {}
    assert Core(raw).MANAGER_ROLE_IDS == [1, 2]


def test_missing_token_raises(monkeypatch):
    monkeypatch.delenv("DISCORD_API_TOKEN", raising=False)
    with pytest.raises(ValueError, match="DISCORD_API_TOKEN"):
        Core({})
