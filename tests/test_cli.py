# tests/test_cli.py
"""Tests for the typelocator CLI."""

from __future__ import annotations

import pytest
import yaml
from typer.testing import CliRunner

from typelocator.cli.cli import app

pytestmark = pytest.mark.tier2

runner = CliRunner()


def test_cli_root_help():
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    assert "typelocator" in result.stdout


def test_all_commands_have_help():
    for cmd in app.registered_commands:
        result = runner.invoke(app, [cmd.name, "--help"])
        assert result.exit_code == 0, f"Help failed for '{cmd.name}'"


def test_packages_lists_sorted_namespaces(plugin_root):
    result = runner.invoke(app, ["packages", "--path", str(plugin_root)])

    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert lines == sorted(lines)
    assert "faulty" in lines


def test_find_prints_numbered_matches(plugin_root):
    result = runner.invoke(app, ["find", "tlcontracts.SomeInterface", "pkgA,pkgB", "-p", str(plugin_root)])

    assert result.exit_code == 0
    assert "Searching for 'tlcontracts.SomeInterface' in 'pkgA,pkgB':" in result.stdout
    assert "  3 found." in result.stdout
    assert "  1. pkgA.ConcreteClassA" in result.stdout
    assert "  3. pkgB.ConcreteClassC" in result.stdout


def test_find_without_namespaces_is_usage_error():
    result = runner.invoke(app, ["find", "tlcontracts.SomeInterface"])

    assert result.exit_code == 2


def test_unknown_command_is_usage_error():
    result = runner.invoke(app, ["list-everything"])

    assert result.exit_code != 0


def test_index_shows_namespace_counts(plugin_root):
    result = runner.invoke(app, ["index", "--path", str(plugin_root)])

    assert result.exit_code == 0
    assert "faulty" in result.stdout
    assert "DEFAULT" in result.stdout
    assert "10 unit(s) in" in result.stdout


@pytest.fixture
def config_file(tmp_path, plugin_root):
    path = tmp_path / "locator.yaml"
    path.write_text(
        "namespaces:\n"
        "  tlcontracts.SomeInterface: pkgA,pkgB\n"
        "blacklist:\n"
        "  tlcontracts.SomeInterface: .*C\n"
    )
    return path


def test_registry_lists_configured_contracts(config_file, plugin_root):
    result = runner.invoke(app, ["registry", "--config", str(config_file), "-p", str(plugin_root)])

    assert result.exit_code == 0
    assert "tlcontracts.SomeInterface (2):" in result.stdout
    assert "  - pkgA.ConcreteClassA" in result.stdout
    assert "pkgB.ConcreteClassC" not in result.stdout


def test_export_names_as_yaml(config_file, plugin_root):
    result = runner.invoke(app, ["export", "--config", str(config_file), "-p", str(plugin_root)])

    assert result.exit_code == 0
    assert yaml.safe_load(result.stdout) == {
        "tlcontracts.SomeInterface": "pkgA.ConcreteClassA,pkgA.ConcreteClassB"
    }


def test_export_namespaces_as_yaml(config_file, plugin_root):
    result = runner.invoke(
        app, ["export", "--config", str(config_file), "--what", "namespaces", "-p", str(plugin_root)]
    )

    assert result.exit_code == 0
    assert yaml.safe_load(result.stdout) == {"tlcontracts.SomeInterface": "pkgA,pkgB"}


def test_export_rejects_unknown_choice(config_file):
    result = runner.invoke(app, ["export", "--config", str(config_file), "--what", "everything"])

    assert result.exit_code == 2
