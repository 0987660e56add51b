# File: tests/conftest.py
# Pytest fixtures that build template trees and a throwaway monorepo layout.

import json
from pathlib import Path

import pytest

from module_generator.config import GeneratorSettings


SERVER_TEMPLATE = {
    "index.js": "import $Module$Resolver from './$Module$Resolver';\n\nexport default $Module$Resolver;\n",
    "ModuleResolver.js": (
        "// $MoDuLe$ resolver ($MODULE$)\n"
        "export const $Module$Resolver = {\n"
        "  name: '$module$',\n"
        "  table: '$_module$',\n"
        "  route: '/$-module$'\n"
        "};\n"
    ),
    "sql/createModuleTable.sql": "CREATE TABLE $_module$ (id INTEGER PRIMARY KEY);\n",
}

CLIENT_TEMPLATE = {
    "index.js": "export { default } from './$Module$View';\n",
    "ModuleView.jsx": "export default () => <h1>$MoDuLe$</h1>;\n",
}

BINARY_CONTENT = b"\x89PNG\xff\xfe$module$\x00"


def write_tree(root: Path, files: dict) -> None:
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")


@pytest.fixture
def templates_root(tmp_path: Path) -> Path:
    """A templates directory with a server and a client template."""
    root = tmp_path / "templates"
    write_tree(root / "server", SERVER_TEMPLATE)
    write_tree(root / "server", {"assets/Module.png": BINARY_CONTENT})
    write_tree(root / "client", CLIENT_TEMPLATE)
    return root


@pytest.fixture
def monorepo(tmp_path: Path) -> Path:
    """
    A monorepo with client and server packages and the default templates
    location under tools/templates/module.
    """
    base = tmp_path / "repo"
    templates = base / "tools" / "templates" / "module"
    write_tree(templates / "server", SERVER_TEMPLATE)
    write_tree(templates / "client", CLIENT_TEMPLATE)

    for package in ("client", "server"):
        package_dir = base / "packages" / package
        package_dir.mkdir(parents=True)
        (package_dir / "package.json").write_text(
            json.dumps({"name": f"@app/{package}", "dependencies": {}}, indent=2) + "\n",
            encoding="utf-8",
        )
    return base


@pytest.fixture
def settings(monorepo: Path) -> GeneratorSettings:
    return GeneratorSettings(base_path=str(monorepo))
