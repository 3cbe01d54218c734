from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, List

import pytest
from typer.testing import CliRunner

from smartjump.core.host import CommandRegistry


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    path = tmp_path / "config" / "config.toml"
    monkeypatch.setenv("SMARTJUMP_CONFIG_FILE", str(path))
    monkeypatch.delenv("SMARTJUMP_DEBUG", raising=False)
    return path


@pytest.fixture()
def go_source() -> str:
    return (
        "package server\n"
        "\n"
        "type Request struct {\n"
        "\tID string\n"
        "}\n"
        "\n"
        "func ProcessRequest(req *Request) error {\n"
        "\treturn req.Validate()\n"
        "}\n"
    )


@pytest.fixture()
def c_source() -> str:
    return (
        "#include <stdio.h>\n"
        "\n"
        "int foo(int x, int y);\n"
        "\n"
        "int foo(int x, int y)\n"
        "\n"
        "{\n"
        "    return bar(x, y);\n"
        "}\n"
    )


@pytest.fixture()
def write_source(tmp_path: Path) -> Callable[[str, str], Path]:
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content)
        return path

    return _write


@pytest.fixture()
def write_temp_toml(tmp_path: Path):
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content.strip() + "\n")
        return path

    return _write


class RecordingCommand:
    """Callable that records its invocations and returns a fixed label."""

    def __init__(self, label: str) -> None:
        self.label = label
        self.calls: List[Any] = []

    def __call__(self, *args: Any, **kwargs: Any) -> str:
        self.calls.append((args, kwargs))
        return self.label


@pytest.fixture()
def registry() -> CommandRegistry:
    commands = CommandRegistry()
    commands.register("goto-definition", RecordingCommand("definition"))
    commands.register("find-references", RecordingCommand("references"))
    return commands
