"""
End-to-end tests for adding and deleting modules in a throwaway monorepo.
"""
import json
import shutil
from pathlib import Path
from unittest.mock import patch

import pytest

from module_generator.config import GeneratorSettings
from module_generator.exceptions import (
    InvalidModuleNameError,
    ModuleExistsError,
    PathResolutionError,
    TemplateError,
    UnknownModuleError,
)
from module_generator.generator import (
    ModuleGenerator,
    add_package_dependency,
    remove_package_dependency,
)


def read_package_json(monorepo: Path, package: str) -> dict:
    with open(monorepo / "packages" / package / "package.json", "r", encoding="utf-8") as f:
        return json.load(f)


def read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


SERVER_AGGREGATOR = "packages/server/src/modules/index.js"
CLIENT_AGGREGATOR = "packages/client/src/modules.js"


class TestAddModule:
    """Adding modules in the per-module layout."""

    def test_materializes_both_locations(self, monorepo: Path, settings: GeneratorSettings):
        result = ModuleGenerator(settings).add_module("billing")

        assert result.locations == ["client", "server"]
        assert (monorepo / "modules/billing/server/BillingResolver.js").is_file()
        assert (monorepo / "modules/billing/server/sql/createBillingTable.sql").is_file()
        assert (monorepo / "modules/billing/client/BillingView.jsx").is_file()
        assert read_text(monorepo / "modules/billing/client/index.js") == (
            "export { default } from './BillingView';\n"
        )

    def test_links_module_packages(self, monorepo: Path, settings: GeneratorSettings):
        ModuleGenerator(settings).add_module("billing")

        for location in ("client", "server"):
            link = monorepo / "node_modules" / "@module" / f"billing-{location}"
            assert link.is_symlink()
            assert link.resolve() == (monorepo / "modules" / "billing" / location).resolve()

    def test_registers_package_dependencies(self, monorepo: Path, settings: GeneratorSettings):
        ModuleGenerator(settings).add_module("billing")

        assert read_package_json(monorepo, "server")["dependencies"] == {
            "@module/billing-server": "^1.0.0"
        }
        assert read_package_json(monorepo, "client")["dependencies"] == {
            "@module/billing-client": "^1.0.0"
        }

    def test_patches_aggregator_files(self, monorepo: Path, settings: GeneratorSettings):
        result = ModuleGenerator(settings).add_module("billing")

        assert read_text(monorepo / SERVER_AGGREGATOR) == (
            "import billing from '@module/billing-server';\n\n"
            "export default {\n"
            "  billing\n"
            "};\n"
        )
        assert read_text(monorepo / CLIENT_AGGREGATOR) == (
            "import billing from '@module/billing-client';\n\n"
            "export default {\n"
            "  billing\n"
            "};\n"
        )
        assert str(monorepo / SERVER_AGGREGATOR) in result.patched_files

    def test_second_module_is_appended(self, monorepo: Path, settings: GeneratorSettings):
        generator = ModuleGenerator(settings)
        generator.add_module("billing", "server")

        generator.add_module("userProfile", "server")

        assert read_text(monorepo / SERVER_AGGREGATOR) == (
            "import billing from '@module/billing-server';\n"
            "import userProfile from '@module/user-profile-server';\n"
            "\n"
            "export default {\n"
            "  billing,\n"
            "  userProfile\n"
            "};\n"
        )
        assert (monorepo / "modules/userProfile/server/UserProfileResolver.js").is_file()

    def test_single_location(self, monorepo: Path, settings: GeneratorSettings):
        ModuleGenerator(settings).add_module("billing", "server")

        assert (monorepo / "modules/billing/server").is_dir()
        assert not (monorepo / "modules/billing/client").exists()
        assert not (monorepo / CLIENT_AGGREGATOR).exists()

    def test_existing_module_is_refused(self, monorepo: Path, settings: GeneratorSettings):
        generator = ModuleGenerator(settings)
        generator.add_module("billing", "server")
        before = read_text(monorepo / SERVER_AGGREGATOR)

        with pytest.raises(ModuleExistsError):
            generator.add_module("billing")

        assert read_text(monorepo / SERVER_AGGREGATOR) == before
        assert not (monorepo / "modules/billing/client").exists()

    def test_legacy_layout(self, monorepo: Path, settings: GeneratorSettings):
        result = ModuleGenerator(settings).add_module("billing", "server", old=True)

        assert (monorepo / "packages/server/src/modules/billing/BillingResolver.js").is_file()
        assert read_text(monorepo / SERVER_AGGREGATOR) == (
            "import billing from './billing';\n\n"
            "export default {\n"
            "  billing\n"
            "};\n"
        )
        assert read_package_json(monorepo, "server")["dependencies"] == {}
        assert not (monorepo / "node_modules").exists()
        assert result.symlinks == []

    def test_legacy_layout_from_settings(self, monorepo: Path):
        settings = GeneratorSettings(base_path=str(monorepo), old=True)

        ModuleGenerator(settings).add_module("billing", "client")

        assert (monorepo / "packages/client/src/modules/billing/BillingView.jsx").is_file()
        assert read_text(monorepo / "packages/client/src/modules/index.js").startswith(
            "import billing from './billing';"
        )

    def test_export_file_name_override(self, monorepo: Path):
        settings = GeneratorSettings(base_path=str(monorepo), export_file_name="all.js")

        ModuleGenerator(settings).add_module("billing", "client")

        assert (monorepo / "packages/client/src/all.js").is_file()
        assert not (monorepo / CLIENT_AGGREGATOR).exists()

    def test_suffixed_location_keeps_its_tag(self, monorepo: Path, settings: GeneratorSettings):
        templates = monorepo / "tools/templates/module"
        shutil.copytree(templates / "server", templates / "server-ts")

        result = ModuleGenerator(settings).add_module("billing", "server-ts")

        assert result.locations == ["server-ts"]
        assert (monorepo / "modules/billing/server-ts/BillingResolver.js").is_file()
        assert not (monorepo / "modules/billing/server").exists()
        assert (monorepo / "node_modules/@module/billing-server-ts").is_symlink()
        assert read_package_json(monorepo, "server")["dependencies"] == {
            "@module/billing-server-ts": "^1.0.0"
        }
        assert read_text(monorepo / SERVER_AGGREGATOR).startswith(
            "import billing from '@module/billing-server-ts';"
        )

    def test_unknown_location(self, settings: GeneratorSettings):
        with pytest.raises(PathResolutionError):
            ModuleGenerator(settings).add_module("billing", "mobile")

    def test_invalid_name(self, monorepo: Path, settings: GeneratorSettings):
        with pytest.raises(InvalidModuleNameError):
            ModuleGenerator(settings).add_module("a/b")

        assert not (monorepo / "modules").exists()

    def test_missing_template(self, monorepo: Path, settings: GeneratorSettings):
        shutil.rmtree(monorepo / "tools/templates/module/client")

        with pytest.raises(TemplateError):
            ModuleGenerator(settings).add_module("billing", "client")


class TestDeleteModule:
    """Deleting modules undoes every step of adding them."""

    def test_delete_restores_repository(self, monorepo: Path, settings: GeneratorSettings):
        generator = ModuleGenerator(settings)
        generator.add_module("billing")

        result = generator.delete_module("billing")

        assert not (monorepo / "modules/billing").exists()
        assert not (monorepo / "node_modules/@module/billing-server").exists()
        assert not (monorepo / "node_modules/@module/billing-client").is_symlink()
        assert read_package_json(monorepo, "server")["dependencies"] == {}
        assert read_package_json(monorepo, "client")["dependencies"] == {}
        assert read_text(monorepo / SERVER_AGGREGATOR) == "export default {};\n"
        assert read_text(monorepo / CLIENT_AGGREGATOR) == "export default {};\n"
        assert str(monorepo / "modules" / "billing") in result.removed_paths

    def test_delete_keeps_other_modules(self, monorepo: Path, settings: GeneratorSettings):
        generator = ModuleGenerator(settings)
        generator.add_module("billing", "server")
        generator.add_module("userProfile", "server")

        generator.delete_module("billing", "server")

        assert read_text(monorepo / SERVER_AGGREGATOR) == (
            "import userProfile from '@module/user-profile-server';\n\n"
            "export default {\n"
            "  userProfile\n"
            "};\n"
        )
        assert read_package_json(monorepo, "server")["dependencies"] == {
            "@module/user-profile-server": "^1.0.0"
        }

    def test_delete_single_location_keeps_the_other(self, monorepo: Path, settings: GeneratorSettings):
        generator = ModuleGenerator(settings)
        generator.add_module("billing")

        generator.delete_module("billing", "client")

        assert (monorepo / "modules/billing/server").is_dir()
        assert not (monorepo / "modules/billing/client").exists()

    def test_delete_legacy_module(self, monorepo: Path, settings: GeneratorSettings):
        generator = ModuleGenerator(settings)
        generator.add_module("billing", "server", old=True)

        generator.delete_module("billing", "server", old=True)

        assert not (monorepo / "packages/server/src/modules/billing").exists()
        assert read_text(monorepo / SERVER_AGGREGATOR) == "export default {};\n"

    def test_delete_suffixed_location(self, monorepo: Path, settings: GeneratorSettings):
        templates = monorepo / "tools/templates/module"
        shutil.copytree(templates / "server", templates / "server-ts")
        generator = ModuleGenerator(settings)
        generator.add_module("billing", "server-ts")

        generator.delete_module("billing", "server-ts")

        assert not (monorepo / "modules/billing").exists()
        assert not (monorepo / "node_modules/@module/billing-server-ts").is_symlink()
        assert read_package_json(monorepo, "server")["dependencies"] == {}
        assert read_text(monorepo / SERVER_AGGREGATOR) == "export default {};\n"

    def test_delete_unknown_module(self, settings: GeneratorSettings):
        with pytest.raises(UnknownModuleError) as exc_info:
            ModuleGenerator(settings).delete_module("ghost")

        assert exc_info.value.error_code == "MODULE_NOT_FOUND"

    def test_delete_runs_formatter(self, monorepo: Path):
        settings = GeneratorSettings(base_path=str(monorepo), formatter="prettier --write")
        generator = ModuleGenerator(settings)
        generator.add_module("billing", "server")

        with patch("module_generator.export_file.subprocess.run") as mock_run:
            generator.delete_module("billing", "server")

        mock_run.assert_called_once()
        assert mock_run.call_args[0][0] == [
            "prettier", "--write", str(monorepo / SERVER_AGGREGATOR)
        ]


class TestPackageDependencies:
    """package.json helpers."""

    def test_add_and_remove(self, monorepo: Path):
        package_path = monorepo / "packages" / "server" / "package.json"

        assert add_package_dependency(package_path, "@module/a-server", "^1.0.0") is True
        assert add_package_dependency(package_path, "@module/a-server", "^1.0.0") is False
        assert read_package_json(monorepo, "server")["name"] == "@app/server"

        assert remove_package_dependency(package_path, "@module/a-server") is True
        assert remove_package_dependency(package_path, "@module/a-server") is False

    def test_missing_package_json(self, tmp_path: Path):
        assert add_package_dependency(tmp_path / "package.json", "@module/a-server", "^1.0.0") is False
        assert remove_package_dependency(tmp_path / "package.json", "@module/a-server") is False

    def test_package_json_keeps_trailing_newline(self, monorepo: Path):
        package_path = monorepo / "packages" / "client" / "package.json"

        add_package_dependency(package_path, "@module/a-client", "^1.0.0")

        assert package_path.read_text(encoding="utf-8").endswith("}\n")
