"""Tests for the command-line entry point."""

from pathlib import Path

import pytest

from opportunity_site.domain.models import Category
from opportunity_site.main import build_parser, load_runtime_config, main
from tests.helpers import make_listing, write_data_dir


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Run from an empty directory with no configuration variables set."""
    for name in ("SITE_URL", "DATA_DIR", "DATA_BASE_URL", "OUTPUT_DIR", "LOG_LEVEL", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def data_dir(tmp_path):
    return write_data_dir(
        tmp_path / "data",
        {
            Category.JOBS: [make_listing(Category.JOBS, id=1, slug="sde-acme")],
            Category.INTERNSHIPS: [make_listing(Category.INTERNSHIPS, id=1, slug="sde-intern")],
        },
    )


class TestArguments:
    """Test argument parsing."""

    def test_render_and_search_exclusive(self):
        """Test --render and --search cannot be combined."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--render", "jobs/x", "--search", "x"])

    def test_invalid_log_level(self):
        """Test unknown log levels are rejected by the parser."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--log-level", "LOUD"])


class TestRuntimeConfig:
    """Test command-line overrides."""

    def test_cli_overrides(self, tmp_path):
        """Test CLI values win over defaults."""
        app_config, env_config = load_runtime_config(
            None, "debug", tmp_path / "cli-data", tmp_path / "cli-out"
        )
        assert app_config.data.data_dir == tmp_path / "cli-data"
        assert app_config.data.content_dir == tmp_path / "cli-data" / "content"
        assert app_config.output.output_dir == tmp_path / "cli-out"
        assert app_config.logging.level == "DEBUG"
        assert env_config.log_level == "DEBUG"

    def test_cli_wins_over_environment(self, tmp_path, monkeypatch):
        """Test CLI values take precedence over environment variables."""
        monkeypatch.setenv("OUTPUT_DIR", str(tmp_path / "env-out"))
        app_config, _ = load_runtime_config(None, output_dir_override=tmp_path / "cli-out")
        assert app_config.output.output_dir == tmp_path / "cli-out"


class TestMain:
    """Test the build, search and render modes."""

    def test_build(self, data_dir, tmp_path):
        """Test a full build exits 0 and writes the site."""
        output_dir = tmp_path / "dist"
        exit_code = main(["--data-dir", str(data_dir), "--output-dir", str(output_dir), "--log-level", "ERROR"])

        assert exit_code == 0
        assert (output_dir / "index.html").is_file()
        assert (output_dir / "jobs" / "sde-acme" / "index.html").is_file()

    def test_search(self, data_dir, capsys):
        """Test matches are printed as category/slug lines."""
        exit_code = main(["--data-dir", str(data_dir), "--search", "globex", "--log-level", "ERROR"])

        assert exit_code == 0
        assert capsys.readouterr().out.splitlines() == ["internships/sde-intern  SDE Intern - Globex"]

    def test_render(self, data_dir, capsys):
        """Test a detail page is printed for a directory-form address."""
        exit_code = main(["--data-dir", str(data_dir), "--render", "jobs/sde-acme", "--log-level", "ERROR"])

        assert exit_code == 0
        assert "<title>Software Engineer | StudentTechProjects</title>" in capsys.readouterr().out

    def test_render_query_form(self, data_dir, capsys):
        """Test the query-form address is accepted."""
        exit_code = main([
            "--data-dir", str(data_dir),
            "--render", "/opportunity.html?category=internships&slug=sde-intern",
            "--log-level", "ERROR",
        ])

        assert exit_code == 0
        assert "SDE Intern" in capsys.readouterr().out

    def test_render_not_found(self, data_dir, capsys):
        """Test an unknown slug prints the message page and exits 2."""
        exit_code = main(["--data-dir", str(data_dir), "--render", "jobs/nope", "--log-level", "ERROR"])

        assert exit_code == 2
        assert "Content not found for this page." in capsys.readouterr().out

    def test_render_bad_address(self, data_dir, capsys):
        """Test an address that names no page exits 2."""
        exit_code = main(["--data-dir", str(data_dir), "--render", "about", "--log-level", "ERROR"])

        assert exit_code == 2
        assert "Not a detail page address" in capsys.readouterr().err

    def test_configuration_error(self, capsys):
        """Test a missing config file exits 1 with a readable error."""
        exit_code = main(["--config", str(Path("missing.yaml"))])

        assert exit_code == 1
        assert "Configuration Error" in capsys.readouterr().err

    def test_invalid_config_value(self, tmp_path, capsys):
        """Test an invalid config value exits 1."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("feed:\n  home_section_limit: 0\n", encoding="utf-8")

        assert main(["--config", str(config_path)]) == 1
        assert "home_section_limit" in capsys.readouterr().err
