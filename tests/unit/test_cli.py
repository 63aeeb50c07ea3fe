"""
Tests for the click command line surface.
"""

import json

import pytest
import yaml
from click.testing import CliRunner

import articlelens.cli as cli_module
from articlelens.cli import RichPresenter, cli
from articlelens.llm import ModelClient
from tests.helpers import FakeProvider


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def credential_path(tmp_path):
    return tmp_path / "state" / "credentials.json"


@pytest.fixture
def config_file(tmp_path, credential_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({"storage": {"credential_path": str(credential_path)}}), encoding="utf-8")
    return path


@pytest.fixture
def page_file(tmp_path, article_page):
    path = tmp_path / "page.html"
    path.write_text(article_page, encoding="utf-8")
    return path


@pytest.fixture
def fake_model(monkeypatch):
    provider = FakeProvider(response="A short summary.")
    monkeypatch.setattr(cli_module, "ModelClient", lambda config: ModelClient(provider=provider, config=config))
    return provider


def test_show_previews_local_file(runner, config_file, page_file, restore_logging):
    result = runner.invoke(cli, ["--config", str(config_file), "show", str(page_file)])

    assert result.exit_code == 0, result.output
    assert "Extracted Content:" in result.output
    assert "Showing 300 words" in result.output


def test_show_fails_for_empty_page(runner, config_file, tmp_path, restore_logging):
    page = tmp_path / "blank.html"
    page.write_text("<html><body></body></html>", encoding="utf-8")

    result = runner.invoke(cli, ["--config", str(config_file), "show", str(page)])

    assert result.exit_code == 1
    assert "No content extracted" in result.output


def test_set_key_writes_credential_file(runner, config_file, credential_path, restore_logging):
    result = runner.invoke(cli, ["--config", str(config_file), "set-key", "--key", "  secret-key  "])

    assert result.exit_code == 0, result.output
    assert "API key saved" in result.output
    assert json.loads(credential_path.read_text(encoding="utf-8")) == {"geminiApiKey": "secret-key"}


def test_set_key_prompts_for_key(runner, config_file, credential_path, restore_logging):
    result = runner.invoke(cli, ["--config", str(config_file), "set-key"], input="prompted-key\n")

    assert result.exit_code == 0, result.output
    assert json.loads(credential_path.read_text(encoding="utf-8")) == {"geminiApiKey": "prompted-key"}


def test_summarize_with_stored_key(runner, config_file, page_file, fake_model, restore_logging):
    runner.invoke(cli, ["--config", str(config_file), "set-key", "--key", "secret-key"])

    result = runner.invoke(cli, ["--config", str(config_file), "summarize", str(page_file)])

    assert result.exit_code == 0, result.output
    assert "A short summary." in result.output
    assert "Summary generated" in result.output
    assert fake_model.calls[0][1] == "secret-key"


def test_ask_without_key_fails(runner, config_file, page_file, fake_model, restore_logging):
    result = runner.invoke(cli, ["--config", str(config_file), "ask", str(page_file), "What is beta?"])

    assert result.exit_code == 1
    assert "Please enter your API key" in result.output
    assert fake_model.calls == []


def test_version(runner):
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_rich_presenter_tracks_controls():
    presenter = RichPresenter(cli_module.console)

    presenter.set_controls_enabled(False)
    assert presenter.controls_enabled is False
