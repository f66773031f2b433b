"""Tests for hub CLI commands."""

import json
from pathlib import Path

import httpx
import pytest
import yaml
from typer.testing import CliRunner

from src.cli.main import app
from src.cli.utils import config as cli_config
from src.cli.utils.config import DEFAULT_URL, ConfigError, ConfigManager
from src.client import HubClient
from src.server.app import create_app
from src.server.config import ServerConfig
from tests.conftest import make_service

runner = CliRunner()

DELIVER = 0.0
FAIL = 0.999


@pytest.fixture
def config_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    directory = tmp_path / "hub"
    monkeypatch.setattr(ConfigManager, "DEFAULT_DIR", directory)
    monkeypatch.delenv("HUB_URL", raising=False)
    return directory


def _route_clients(monkeypatch: pytest.MonkeyPatch, transport: httpx.AsyncBaseTransport) -> None:
    def _client(*args, transport=None, **kwargs):
        return HubClient(*args, transport=transport or injected, **kwargs)

    injected = transport
    monkeypatch.setattr(cli_config, "HubClient", _client)


def _wire_hub(monkeypatch: pytest.MonkeyPatch, config: ServerConfig, draws=()) -> None:
    """Route CLI requests to an in-process app."""
    hub = create_app(config, service=make_service(draws))
    _route_clients(monkeypatch, httpx.ASGITransport(app=hub))


def _send_json(*args: str):
    return runner.invoke(app, ["send", "-r", "a@x.com", "-m", "Hello", *args, "--json"])


class TestInit:
    def test_writes_config(self, config_dir: Path) -> None:
        result = runner.invoke(app, ["init", "--url", "http://hub.internal:9000/"])
        assert result.exit_code == 0
        data = yaml.safe_load((config_dir / "config.yaml").read_text())
        assert data == {"url": "http://hub.internal:9000", "timeout": 30.0}

    def test_refuses_overwrite_without_force(self, config_dir: Path) -> None:
        assert runner.invoke(app, ["init", "--url", "http://a.test"]).exit_code == 0
        result = runner.invoke(app, ["init", "--url", "http://b.test"])
        assert result.exit_code == 1
        assert "already exists" in result.stdout
        assert runner.invoke(app, ["init", "--url", "http://b.test", "--force"]).exit_code == 0

    def test_invalid_url_exits_2(self, config_dir: Path) -> None:
        assert runner.invoke(app, ["init", "--url", "ftp://nope"]).exit_code == 2


class TestResolve:
    def test_precedence(self, config_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        manager = ConfigManager()
        assert manager.resolve().url == DEFAULT_URL
        runner.invoke(app, ["init", "--url", "http://file.test"])
        assert manager.resolve().url == "http://file.test"
        monkeypatch.setenv("HUB_URL", "http://env.test")
        assert manager.resolve().url == "http://env.test"
        assert manager.resolve("http://flag.test").url == "http://flag.test"

    def test_malformed_file(self, config_dir: Path) -> None:
        config_dir.mkdir(parents=True)
        (config_dir / "config.yaml").write_text("- just\n- a list\n")
        with pytest.raises(ConfigError, match="expected a mapping"):
            ConfigManager().resolve()

    @pytest.mark.asyncio
    async def test_open_client_uses_given_transport(self, config_dir: Path, server_config: ServerConfig) -> None:
        hub = create_app(server_config, service=make_service([DELIVER]))
        manager = ConfigManager()
        async with manager.open_client("http://hub.test", transport=httpx.ASGITransport(app=hub)) as client:
            assert client.base_url == "http://hub.test"
            assert (await client.stats())["total"] == 0


class TestSend:
    def test_send_json(self, config_dir: Path, monkeypatch, server_config: ServerConfig) -> None:
        _wire_hub(monkeypatch, server_config, [DELIVER, DELIVER])
        result = _send_json("-c", "email", "-c", "push", "--category", "orders", "--var", "order=42")
        assert result.exit_code == 0, result.stdout
        data = json.loads(result.stdout)
        assert data["status"] == "delivered"
        assert set(data["channelStatus"]) == {"email", "push"}
        assert data["category"] == "orders"

    def test_send_table_output(self, config_dir: Path, monkeypatch, server_config: ServerConfig) -> None:
        _wire_hub(monkeypatch, server_config, [FAIL])
        result = runner.invoke(app, ["send", "-r", "a@x.com", "-m", "Hi", "-c", "sms"])
        assert result.exit_code == 0
        assert "failed" in result.stdout
        assert "sms" in result.stdout

    def test_missing_channel_exits_2(self, config_dir: Path) -> None:
        result = runner.invoke(app, ["send", "-r", "a@x.com", "-m", "Hi"])
        assert result.exit_code == 2
        assert "channel" in result.stdout.lower()

    def test_unknown_channel_exits_2(self, config_dir: Path) -> None:
        result = runner.invoke(app, ["send", "-r", "a@x.com", "-m", "Hi", "-c", "fax"])
        assert result.exit_code == 2
        assert "fax" in result.stdout

    def test_unreachable_hub_exits_1(self, config_dir: Path, monkeypatch) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        _route_clients(monkeypatch, httpx.MockTransport(refuse))
        result = runner.invoke(app, ["send", "-r", "a", "-m", "Hi", "-c", "sms"])
        assert result.exit_code == 1
        assert "Failed to send message" in result.stdout


class TestGet:
    def test_get_existing(self, config_dir: Path, monkeypatch, server_config: ServerConfig) -> None:
        _wire_hub(monkeypatch, server_config, [DELIVER])
        sent = json.loads(_send_json("-c", "in_app").stdout)
        result = runner.invoke(app, ["get", sent["messageId"], "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == sent

    def test_get_table_output(self, config_dir: Path, monkeypatch, server_config: ServerConfig) -> None:
        _wire_hub(monkeypatch, server_config, [DELIVER])
        sent = json.loads(_send_json("-c", "webhook").stdout)
        result = runner.invoke(app, ["get", sent["messageId"]])
        assert result.exit_code == 0
        assert "webhook" in result.stdout
        assert "100.0%" in result.stdout

    def test_get_unknown_exits_1(self, config_dir: Path, monkeypatch, server_config: ServerConfig) -> None:
        _wire_hub(monkeypatch, server_config)
        result = runner.invoke(app, ["get", "msg_missing"])
        assert result.exit_code == 1
        assert "not found" in result.stdout.lower()

    def test_get_stats_id_is_not_found(self, config_dir: Path, monkeypatch, server_config: ServerConfig) -> None:
        _wire_hub(monkeypatch, server_config, [DELIVER])
        assert _send_json("-c", "email").exit_code == 0
        result = runner.invoke(app, ["get", "stats"])
        assert result.exit_code == 1
        assert "not found" in result.stdout.lower()
        assert result.exception is None or isinstance(result.exception, SystemExit)


class TestListAndStats:
    def _seed(self, monkeypatch, server_config: ServerConfig) -> None:
        _wire_hub(monkeypatch, server_config, [DELIVER, FAIL, DELIVER])
        for category in ("orders", "news", "orders"):
            assert _send_json("-c", "email", "--category", category).exit_code == 0

    def test_list_filters(self, config_dir: Path, monkeypatch, server_config: ServerConfig) -> None:
        self._seed(monkeypatch, server_config)
        result = runner.invoke(app, ["list", "--status", "delivered", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["count"] == 2
        assert {m["status"] for m in data["messages"]} == {"delivered"}

    def test_list_empty_page(self, config_dir: Path, monkeypatch, server_config: ServerConfig) -> None:
        self._seed(monkeypatch, server_config)
        result = runner.invoke(app, ["list", "--page", "5"])
        assert result.exit_code == 0
        assert "No messages found" in result.stdout

    def test_list_rejects_unknown_status(self, config_dir: Path) -> None:
        result = runner.invoke(app, ["list", "--status", "lost"])
        assert result.exit_code == 2

    def test_stats(self, config_dir: Path, monkeypatch, server_config: ServerConfig) -> None:
        self._seed(monkeypatch, server_config)
        result = runner.invoke(app, ["stats", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["delivered"] == 2
        assert data["failed"] == 1
        assert data["total"] == 3


def test_no_args_shows_help() -> None:
    result = runner.invoke(app, [])
    assert "send" in result.stdout
