"""
Tests for the module-generator command line.
"""
import logging
import shutil
from pathlib import Path

import pytest

from module_generator.cli import build_parser, main


@pytest.fixture(autouse=True)
def restore_root_logger():
    """main() reconfigures the root logger; put it back after each test."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


def test_parser_defaults_to_both_locations():
    args = build_parser().parse_args(["addmodule", "billing"])

    assert args.command == "addmodule"
    assert args.module_name == "billing"
    assert args.location == "both"
    assert args.old is None


def test_parser_accepts_suffixed_location():
    args = build_parser().parse_args(["addmodule", "billing", "server-ts"])

    assert args.location == "server-ts"


def test_unknown_location_fails(monorepo: Path):
    assert main(["--base-path", str(monorepo), "--no-color", "addmodule", "billing", "mobile"]) == 1
    assert not (monorepo / "modules").exists()


def test_addmodule_suffixed_location(monorepo: Path):
    templates = monorepo / "tools/templates/module"
    shutil.copytree(templates / "server", templates / "server-ts")

    exit_code = main(["--base-path", str(monorepo), "--no-color", "addmodule", "billing", "server-ts"])

    assert exit_code == 0
    assert (monorepo / "modules/billing/server-ts/BillingResolver.js").is_file()


def test_parser_requires_a_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_addmodule(monorepo: Path):
    exit_code = main(["--base-path", str(monorepo), "--no-color", "addmodule", "billing", "server"])

    assert exit_code == 0
    assert (monorepo / "modules/billing/server/BillingResolver.js").is_file()
    assert not (monorepo / "modules/billing/client").exists()


def test_addmodule_old_layout(monorepo: Path):
    exit_code = main(["--base-path", str(monorepo), "--old", "--no-color", "addmodule", "billing", "client"])

    assert exit_code == 0
    assert (monorepo / "packages/client/src/modules/billing/BillingView.jsx").is_file()


def test_deletemodule(monorepo: Path):
    main(["--base-path", str(monorepo), "--no-color", "addmodule", "billing"])

    exit_code = main(["--base-path", str(monorepo), "--no-color", "deletemodule", "billing"])

    assert exit_code == 0
    assert not (monorepo / "modules/billing").exists()


def test_deletemodule_unknown_module(monorepo: Path):
    assert main(["--base-path", str(monorepo), "--no-color", "deletemodule", "ghost"]) == 1


def test_addmodule_twice_fails(monorepo: Path):
    args = ["--base-path", str(monorepo), "--no-color", "addmodule", "billing", "server"]

    assert main(args) == 0
    assert main(args) == 1


def test_config_file(monorepo: Path, tmp_path: Path):
    config_path = tmp_path / "module-generator.yaml"
    config_path.write_text(f"base_path: {monorepo}\nold: true\n", encoding="utf-8")

    exit_code = main(["--config", str(config_path), "--no-color", "addmodule", "billing", "server"])

    assert exit_code == 0
    assert (monorepo / "packages/server/src/modules/billing").is_dir()


def test_missing_config_file(tmp_path: Path):
    assert main(["--config", str(tmp_path / "missing.yaml"), "--no-color", "addmodule", "billing"]) == 1


def test_error_is_reported_on_stderr(monorepo: Path, capsys):
    exit_code = main(["--base-path", str(monorepo), "--no-color", "addmodule", "a\\b"])

    assert exit_code == 1
    assert "INVALID_MODULE_NAME" in capsys.readouterr().err
