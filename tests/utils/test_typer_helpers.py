"""Tests for SuggestingGroup."""

import typer
from typer.testing import CliRunner

from diligence_cli.utils.typer_helpers import SuggestingGroup

runner = CliRunner()

app = typer.Typer(cls=SuggestingGroup)


@app.command("generate")
def generate():
    print("generate ran")


@app.command("general")
def general():
    print("general ran")


@app.command("cleanup")
def cleanup():
    print("cleanup ran")


def test_exact_name():
    assert runner.invoke(app, ["cleanup"]).output.strip() == "cleanup ran"


def test_unique_prefix():
    assert runner.invoke(app, ["cl"]).output.strip() == "cleanup ran"


def test_ambiguous_prefix_suggests():
    result = runner.invoke(app, ["gener"])
    assert result.exit_code == 2
    assert "Did you mean one of these?" in result.output
    assert "generate" in result.output
    assert "general" in result.output
