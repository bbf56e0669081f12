"""Tests for command-line parsing and the application context."""

from pathlib import Path

import httpx
import pytest

from gamehunt.main import ApplicationContext, parse_arguments, run_headless
from gamehunt.models import AppConfig
from gamehunt.services import ConfigurationService, HttpClientService
from gamehunt.services.errors import ConfigurationError
from gamehunt.viewmodels import GameDetailViewModel, HomeViewModel


class TestParseArguments:
    def test_defaults(self) -> None:
        args = parse_arguments([])
        assert args.config is None
        assert args.log_level is None
        assert args.log_dir is None
        assert args.api_key is None
        assert args.no_tui is False
        assert args.save_key is False

    def test_all_flags(self) -> None:
        args = parse_arguments(
            [
                "--config", "cfg.json",
                "--log-level", "DEBUG",
                "--log-dir", "out",
                "--api-key", "abc",
                "--no-tui",
                "--save-key",
            ]
        )
        assert args.config == Path("cfg.json")
        assert args.log_level == "DEBUG"
        assert args.log_dir == Path("out")
        assert args.api_key == "abc"
        assert args.no_tui is True
        assert args.save_key is True

    def test_rejects_unknown_log_level(self) -> None:
        with pytest.raises(SystemExit):
            parse_arguments(["--log-level", "VERBOSE"])


def _config_service(tmp_path: Path, api_key: str = "") -> ConfigurationService:
    service = ConfigurationService(config_path=tmp_path / "config.json")
    service.save_config(AppConfig(api_key=api_key, log_level="WARNING"))
    return service


class TestApplicationContext:
    def test_stored_config_is_used(self, tmp_path: Path) -> None:
        context = ApplicationContext(config_service=_config_service(tmp_path, api_key="stored"))
        assert context.config.api_key == "stored"
        assert context.config.log_level == "WARNING"

    def test_api_key_override_is_stripped(self, tmp_path: Path) -> None:
        context = ApplicationContext(api_key="  cli-key ", config_service=_config_service(tmp_path, "stored"))
        assert context.config.api_key == "cli-key"

    def test_missing_api_key_is_a_configuration_error(self, tmp_path: Path) -> None:
        context = ApplicationContext(config_service=_config_service(tmp_path))

        with pytest.raises(ConfigurationError) as exc_info:
            _ = context.api

        assert exc_info.value.setting == "api_key"
        assert "Or pass the key with --api-key" in exc_info.value.suggested_actions

    def test_save_api_key_writes_config(self, tmp_path: Path) -> None:
        service = _config_service(tmp_path)
        context = ApplicationContext(api_key=" new-key ", config_service=service)

        context.save_api_key()

        stored = ConfigurationService(config_path=tmp_path / "config.json").load_config()
        assert stored.api_key == "new-key"
        assert stored.log_level == "WARNING"

    def test_save_api_key_needs_command_line_key(self, tmp_path: Path) -> None:
        context = ApplicationContext(config_service=_config_service(tmp_path, "stored"))

        with pytest.raises(ConfigurationError) as exc_info:
            context.save_api_key()

        assert exc_info.value.setting == "api_key"

    async def test_view_models_share_repositories(self, tmp_path: Path) -> None:
        http_client = HttpClientService(base_url="https://api.example.test/api/")
        context = ApplicationContext(
            config_service=_config_service(tmp_path, "key"),
            http_client=http_client,
        )

        assert isinstance(context.create_home_view_model(), HomeViewModel)
        assert isinstance(context.create_detail_view_model(), GameDetailViewModel)
        assert context.game_repository is context.game_repository
        assert context.api.http_client is http_client
        await context.cleanup()


async def test_run_headless_prints_popular_games(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    seen: list[httpx.URL] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url)
        return httpx.Response(
            200,
            json={
                "count": 1,
                "next": None,
                "previous": None,
                "results": [
                    {
                        "id": 1,
                        "name": "Portal 2",
                        "slug": "portal-2",
                        "background_image": None,
                        "rating": 4.6,
                        "released": "2011-04-18",
                    }
                ],
            },
            request=request,
        )

    context = ApplicationContext(
        config_service=_config_service(tmp_path, "key"),
        http_client=HttpClientService(
            base_url="https://api.example.test/api/",
            transport=httpx.MockTransport(handler),
        ),
    )

    assert await run_headless(context) == 0

    out = capsys.readouterr().out
    assert "Portal 2 (2011-04-18) - 4.6" in out
    assert seen[0].params["metacritic"] == "90,100"
    assert seen[0].params["key"] == "key"


async def test_run_headless_reports_failures(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, request=request)

    context = ApplicationContext(
        config_service=_config_service(tmp_path, "bad"),
        http_client=HttpClientService(
            base_url="https://api.example.test/api/",
            transport=httpx.MockTransport(handler),
        ),
    )

    assert await run_headless(context) == 1
    assert "Authentication failed" in capsys.readouterr().err
