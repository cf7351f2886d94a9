from unittest.mock import patch

from click.testing import CliRunner

from identityhub.cli import cli
from identityhub.core.config import Settings


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


def test_roles_lists_catalog():
    runner = CliRunner()

    result = runner.invoke(cli, ["roles"])

    assert result.exit_code == 0
    assert "ROLE_ADMIN" in result.output
    assert "Regular user with basic access" in result.output
    assert len(result.output.strip().splitlines()) == 4


def test_info_shows_configuration():
    runner = CliRunner()

    with patch("identityhub.cli.get_settings", return_value=_settings(port=9100)):
        result = runner.invoke(cli, ["info"])

    assert result.exit_code == 0
    assert "9100" in result.output
    assert "Retry attempts:  3" in result.output


def test_serve_rejects_multiple_workers_with_sqlite():
    runner = CliRunner()

    with patch("identityhub.cli.get_settings", return_value=_settings()), \
         patch("uvicorn.run") as mock_run:
        result = runner.invoke(cli, ["serve", "--workers", "2"])

    assert result.exit_code == 1
    assert "SQLite does not support multiple worker processes" in result.output
    mock_run.assert_not_called()


def test_serve_starts_uvicorn():
    runner = CliRunner()

    with patch("identityhub.cli.get_settings", return_value=_settings()), \
         patch("identityhub.cli.configure_logging"), \
         patch("uvicorn.run") as mock_run:
        result = runner.invoke(cli, ["serve", "--port", "9001"])

    assert result.exit_code == 0
    mock_run.assert_called_once()
    assert mock_run.call_args.args[0] == "identityhub.infrastructure.api.app:app"
    assert mock_run.call_args.kwargs["port"] == 9001
    assert mock_run.call_args.kwargs["workers"] == 1
