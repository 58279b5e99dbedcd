import os

from tagbind import load_environment, set_defaults, set_field_with_key
from tagbind.descriptors import descriptor_index
from tagbind.environment import resolve_value

from conftest import PORT_ENV, SERVERS_ENV, ServerConfig


def test_resolve_value_without_env_tag_passes_through(monkeypatch):
    monkeypatch.setenv("LOGLEVEL", "debug")
    desc = descriptor_index(ServerConfig)["loglevel"]
    assert resolve_value(desc, "info") == "info"


def test_resolve_value_prefers_the_environment(monkeypatch):
    desc = descriptor_index(ServerConfig)["servers"]
    assert resolve_value(desc, "a,b") == "a,b"
    monkeypatch.setenv(SERVERS_ENV, "c")
    assert resolve_value(desc, "a,b") == "c"


def test_resolve_value_uses_empty_environment_values(monkeypatch):
    desc = descriptor_index(ServerConfig)["servers"]
    assert resolve_value(desc, "a,b", env={SERVERS_ENV: ""}) == ""


def test_load_environment_layers_process_over_dotenv(tmp_path, monkeypatch):
    dotenv = tmp_path / ".env"
    dotenv.write_text(f"{SERVERS_ENV}=file1,file2\n{PORT_ENV}=6000\nTAGBIND_TEST_EMPTY\n")
    monkeypatch.setenv(PORT_ENV, "7000")

    env = load_environment(str(dotenv))

    assert env[SERVERS_ENV] == "file1,file2"
    assert env[PORT_ENV] == "7000"
    assert "TAGBIND_TEST_EMPTY" not in env
    assert SERVERS_ENV not in os.environ


def test_load_environment_feeds_the_binder(tmp_path):
    dotenv = tmp_path / ".env"
    dotenv.write_text(f"{SERVERS_ENV}=broker1, broker2\n{PORT_ENV}=6000\n")
    env = load_environment(str(dotenv))
    config = ServerConfig()

    set_defaults(config, env=env)
    set_field_with_key(config, "servers", "ignored", env=env)

    assert config.port == 6000
    assert config.servers == ["broker1", "broker2"]


def test_load_environment_without_dotenv_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(PORT_ENV, "8000")
    env = load_environment(str(tmp_path / "missing.env"))
    assert env[PORT_ENV] == "8000"
