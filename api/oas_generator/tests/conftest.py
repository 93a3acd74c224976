import importlib
import json
import sys
from collections.abc import Callable, Generator
from pathlib import Path
from types import ModuleType
from typing import Any

import pytest

from py_oas_generator.generator.template_engine import PythonCodeGenerator
from py_oas_generator.parser.oas_parser import OASParser, ParsedSpec
from py_oas_generator.utils.file_utils import write_files_to_disk

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def svix_spec_path() -> Path:
    return FIXTURES / "svix.json"


@pytest.fixture
def svix_spec_dict(svix_spec_path: Path) -> dict[str, Any]:
    return json.loads(svix_spec_path.read_text(encoding="utf-8"))


@pytest.fixture
def svix_spec(svix_spec_dict: dict[str, Any]) -> ParsedSpec:
    return OASParser().parse_dict(svix_spec_dict)


@pytest.fixture
def generate_package(
    tmp_path: Path, svix_spec: ParsedSpec
) -> Generator[Callable[..., ModuleType], None, None]:
    """Render a spec (the Svix fixture by default) into ``tmp_path`` and import the resulting package."""
    imported: list[str] = []

    def _generate(
        package_name: str = "svix_client",
        *,
        group_parameters: bool = False,
        spec: ParsedSpec | None = None,
    ) -> ModuleType:
        generator = PythonCodeGenerator(group_parameters=group_parameters)
        files = generator.generate_client(spec or svix_spec, tmp_path / package_name, package_name)
        write_files_to_disk(files)
        sys.path.insert(0, str(tmp_path / package_name))
        imported.append(package_name)
        importlib.invalidate_caches()
        return importlib.import_module(package_name)

    yield _generate

    for package_name in imported:
        sys.path.remove(str(tmp_path / package_name))
        for module_name in [m for m in sys.modules if m == package_name or m.startswith(f"{package_name}.")]:
            del sys.modules[module_name]
