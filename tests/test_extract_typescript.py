from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from parse.items import ClassDeclaration, ImportDeclaration, ParseError
from parse.typescript import extract_import_sources, extract_items, grammar_for

if TYPE_CHECKING:
    from pathlib import Path


def _write(root: Path, relative: str, content: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def test_extract_items_keeps_declaration_order(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "src/users/users.service.ts",
        "import { Injectable } from '@nestjs/common';\n"
        "\n"
        "class Helper {\n"
        "  run() {\n"
        "    return 1;\n"
        "  }\n"
        "}\n"
        "\n"
        'import { UsersRepository } from "./users.repository";\n',
    )

    items = extract_items(path)

    assert [type(item) for item in items] == [
        ImportDeclaration,
        ClassDeclaration,
        ImportDeclaration,
    ]
    assert items[0].source == "@nestjs/common"
    assert items[2].source == "./users.repository"


def test_extract_items_includes_exported_classes_and_method_lines(
    tmp_path: Path,
) -> None:
    path = _write(
        tmp_path,
        "src/users/users.service.ts",
        "export class UsersService {\n"
        "  constructor(private readonly repo: string) {}\n"
        "\n"
        "  findAll(): string[] {\n"
        "    const a = 1;\n"
        "    const b = 2;\n"
        "    return [];\n"
        "  }\n"
        "}\n",
    )

    items = extract_items(path)

    assert len(items) == 1
    declaration = items[0]
    assert isinstance(declaration, ClassDeclaration)
    assert declaration.name == "UsersService"
    assert [m.name for m in declaration.methods] == ["findAll"]
    find_all = declaration.methods[0]
    assert find_all.class_name == "UsersService"
    assert find_all.start_line == 4
    assert find_all.end_line == 8
    assert find_all.line_count == 4


def test_import_span_points_at_statement(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "src/app.ts",
        "const x = 1;\n  import { a } from './a';\n",
    )

    (declaration,) = extract_items(path)

    assert isinstance(declaration, ImportDeclaration)
    assert declaration.span.line == 2
    assert declaration.span.column == 3
    assert declaration.span.line_text == "  import { a } from './a';"
    assert declaration.span.length == len("import { a } from './a';")


def test_extract_items_ignores_nested_and_non_import_statements(
    tmp_path: Path,
) -> None:
    path = _write(
        tmp_path,
        "src/app.ts",
        "export const value = 1;\n"
        "function build() {\n"
        "  class Inner {\n"
        "    go() {}\n"
        "  }\n"
        "  return Inner;\n"
        "}\n",
    )

    assert extract_items(path) == []


def test_extract_items_raises_parse_error_with_location(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "src/broken.ts",
        "import { a } from './a';\nexport class Broken {\n  method( {\n}\n",
    )

    with pytest.raises(ParseError) as exc_info:
        extract_items(path)

    assert exc_info.value.path == path
    assert exc_info.value.message == "Syntax Error"


def test_extract_items_missing_file_is_parse_error(tmp_path: Path) -> None:
    with pytest.raises(ParseError, match="cannot read file"):
        extract_items(tmp_path / "missing.ts")


def test_extract_import_sources_javascript(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "web/App.jsx",
        "import React from 'react';\n"
        "import './styles.css';\n"
        "import { Button } from '../components/Button';\n"
        "export default function App() {\n"
        "  return <Button />;\n"
        "}\n",
    )

    assert extract_import_sources(path) == [
        "react",
        "./styles.css",
        "../components/Button",
    ]


def test_grammar_for_suffixes(tmp_path: Path) -> None:
    assert grammar_for(tmp_path / "a.ts") == "typescript"
    assert grammar_for(tmp_path / "a.tsx") == "tsx"
    assert grammar_for(tmp_path / "a.js") == "javascript"
    assert grammar_for(tmp_path / "a.JSX") == "javascript"
    assert grammar_for(tmp_path / "a.unknown") == "typescript"


def test_constructors_are_not_measured(tmp_path: Path) -> None:
    body = "".join(f"    this.v{i} = {i};\n" for i in range(10))
    path = _write(
        tmp_path,
        "src/users/users.service.ts",
        f"class UsersService {{\n  constructor() {{\n{body}  }}\n}}\n",
    )

    (declaration,) = extract_items(path)

    assert isinstance(declaration, ClassDeclaration)
    assert declaration.methods == ()
