import os
from pathlib import Path

from enchantlore.config import CONFIG_ENV_VAR
from enchantlore.config_env import load_env


def test_env_loads_dotenv(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("FOO=bar\nENCHANTLORE_LOG_LEVEL=DEBUG\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ENCHANTLORE_LOG_LEVEL", "INFO")
    monkeypatch.delenv("FOO", raising=False)

    load_env()

    assert os.getenv("FOO") == "bar"
    assert os.getenv("ENCHANTLORE_LOG_LEVEL") == "INFO"


def test_config_path_from_env_is_resolved(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    (tmp_path / ".env").write_text(f"{CONFIG_ENV_VAR}=./conf/config.yml\n", encoding="utf-8")

    load_env()

    value = os.getenv(CONFIG_ENV_VAR)
    assert value
    assert Path(value) == (tmp_path / "conf" / "config.yml").resolve()
