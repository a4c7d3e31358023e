from __future__ import annotations

import pytest

from mitt_formula.test.architecture._utils import (
    iter_python_files,
    matches_prefix,
    package_root,
    parse_imports,
)

# Each layer may only import the layers listed for it (plus itself).
ALLOWED: dict[str, set[str]] = {
    "core": set(),
    "platform": {"core"},
    "formula": {"core", "platform"},
    "output": {"core", "formula"},
    "services": {"core", "platform", "formula", "output"},
    "cli": {"core", "platform", "formula", "output", "services"},
}


@pytest.mark.parametrize("layer", sorted(ALLOWED))
def test_layer_imports(layer: str) -> None:
    root = package_root()
    forbidden = set(ALLOWED) - ALLOWED[layer] - {layer}
    offenders: list[str] = []

    for file_path in iter_python_files(root / layer):
        rel = file_path.relative_to(root)
        for item in parse_imports(file_path):
            for other in forbidden:
                if matches_prefix(item.module, f"mitt_formula.{other}"):
                    offenders.append(f"{rel}:{item.line}: forbidden import '{item.module}'")

    assert not offenders, f"{layer} dependency violations:\n" + "\n".join(offenders)


def test_package_code_does_not_import_tests() -> None:
    root = package_root()
    offenders: list[str] = []

    for layer in ALLOWED:
        for file_path in iter_python_files(root / layer):
            rel = file_path.relative_to(root)
            for item in parse_imports(file_path):
                if matches_prefix(item.module, "mitt_formula.test"):
                    offenders.append(f"{rel}:{item.line}: imports test code '{item.module}'")

    assert not offenders, "\n".join(offenders)
