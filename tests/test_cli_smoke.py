from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from cli import __version__, main
from rules.config import CONFIG_FILENAME, load_config

if TYPE_CHECKING:
    from pathlib import Path


def _write(root: Path, relative: str, content: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def _write_config(root: Path, **overrides: object) -> None:
    config: dict[str, object] = {
        "max_lines_per_function": 40,
        "architecture_pattern": "MVC",
        "forbidden_imports": [],
    }
    config.update(overrides)
    (root / CONFIG_FILENAME).write_text(json.dumps(config), encoding="utf-8")


def _write_clean_project(root: Path) -> None:
    _write(
        root,
        "src/users/users.service.ts",
        "import { Injectable } from '@nestjs/common';\n"
        "import { User } from './user.entity';\n"
        "\n"
        "@Injectable()\n"
        "export class UsersService {\n"
        "  find(): User[] {\n"
        "    return [];\n"
        "  }\n"
        "}\n",
    )
    _write(root, "src/users/user.entity.ts", "export class User {}\n")


def test_cli_clean_project_exits_zero(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    repo_root = tmp_path / "repo"
    _write_clean_project(repo_root)
    _write_config(repo_root)

    exit_code = main([str(repo_root), "--no-progress"])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "Violation in:" not in out
    assert "No circular dependencies detected." in out
    assert "Project is clean." in out


def test_cli_single_forbidden_import_prints_one_block(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    repo_root = tmp_path / "repo"
    _write_clean_project(repo_root)
    _write(
        repo_root,
        "src/presentation/page.ts",
        "import { Db } from '../infrastructure/db';\n",
    )
    _write(repo_root, "src/infrastructure/db.ts", "export class Db {}\n")
    _write_config(
        repo_root,
        forbidden_imports=[{"from": "presentation", "to": "infrastructure"}],
    )

    exit_code = main([str(repo_root), "--no-progress"])

    assert exit_code == 1
    out = capsys.readouterr().out
    assert out.count("Violation in:") == 1
    assert "arch::forbidden-import" in out
    assert "page.ts:1:1" in out
    assert "Found 1 violation(s)." in out


def test_cli_cycle_exits_one(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    repo_root = tmp_path / "repo"
    _write(repo_root, "src/a.ts", "import { b } from './b';\nexport const a = 1;\n")
    _write(repo_root, "src/b.ts", "import { a } from './a';\nexport const b = 1;\n")
    _write_config(repo_root)

    exit_code = main([str(repo_root), "--no-progress", "--jobs", "2"])

    assert exit_code == 1
    out = capsys.readouterr().out
    assert "Violation in:" not in out
    assert "Cycle #1" in out
    assert "Found 1 circular dependency(ies)." in out


def test_cli_missing_config_reports_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    repo_root = tmp_path / "repo"
    _write_clean_project(repo_root)

    exit_code = main([str(repo_root), "--no-progress"])

    assert exit_code == 1
    err = capsys.readouterr().err
    assert "Configuration file not found" in err
    assert "--init" in err


def test_cli_init_writes_config_from_detected_framework(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    repo_root = tmp_path / "repo"
    _write_clean_project(repo_root)
    _write(
        repo_root,
        "package.json",
        json.dumps({"dependencies": {"@nestjs/core": "^10.0.0", "express": "^4"}}),
    )

    exit_code = main([str(repo_root), "--init", "--no-progress"])

    assert exit_code == 0
    assert load_config(repo_root).max_lines_per_function == 40
    assert "Created" in capsys.readouterr().out


def test_cli_init_keeps_existing_config(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _write_clean_project(repo_root)
    _write_config(repo_root, max_lines_per_function=1)

    exit_code = main([str(repo_root), "--init", "--no-progress"])

    assert exit_code == 1
    assert load_config(repo_root).max_lines_per_function == 1


def test_cli_invalid_root(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main([str(tmp_path / "missing"), "--no-progress"])

    assert exit_code == 1
    assert "not a directory" in capsys.readouterr().err


def test_cli_empty_project(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write_config(tmp_path)

    assert main([str(tmp_path), "--no-progress"]) == 0
    assert "No source files found." in capsys.readouterr().out


@pytest.mark.parametrize("flag", ["-v", "--version"])
def test_cli_version(flag: str, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main([flag])

    assert exc_info.value.code == 0
    assert __version__ in capsys.readouterr().out


@pytest.mark.parametrize("flag", ["-h", "--help"])
def test_cli_help(flag: str, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main([flag])

    assert exc_info.value.code == 0
    assert "usage: architect-linter" in capsys.readouterr().out


def test_cli_usage_error_exits_one(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--jobs", "many"])

    assert exc_info.value.code == 1
    assert "invalid int value" in capsys.readouterr().err
