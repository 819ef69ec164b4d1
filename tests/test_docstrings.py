"""Docstring completeness checks for parameters and return values."""

from __future__ import annotations

import importlib
import inspect
from pathlib import Path
from types import ModuleType
from typing import Iterable, List, Optional, Set

import pytest
from numpydoc.docscrape import NumpyDocString

import linesman


def _collect_modules(root: ModuleType) -> List[ModuleType]:
    # Subpackages carry no __init__.py, so walk the source tree directly.
    modules: List[ModuleType] = []
    for base in root.__path__:
        base_path = Path(base)
        for path in sorted(base_path.rglob("*.py")):
            parts = path.relative_to(base_path).with_suffix("").parts
            if parts[-1] == "__init__":
                parts = parts[:-1]
            name = ".".join((root.__name__, *parts))
            try:
                modules.append(importlib.import_module(name))
            except Exception:
                continue
    return modules


def _collect_callables(modules: Iterable[ModuleType]) -> List[object]:
    items: List[object] = []
    seen: Set[int] = set()

    def add(obj: object) -> None:
        if id(obj) not in seen:
            seen.add(id(obj))
            items.append(obj)

    for module in modules:
        for name, obj in inspect.getmembers(module):
            if name.startswith("__") or getattr(obj, "__module__", None) != module.__name__:
                continue
            if inspect.isfunction(obj):
                add(obj)
            elif inspect.isclass(obj):
                add(obj)
                for meth_name, meth in vars(obj).items():
                    if meth_name.startswith("__"):
                        continue
                    if isinstance(meth, (staticmethod, classmethod)):
                        meth = meth.__func__
                    if inspect.isfunction(meth):
                        add(meth)

    return items


def _signature(obj: object) -> Optional[inspect.Signature]:
    try:
        return inspect.signature(obj)
    except (TypeError, ValueError):
        return None


def _documented_parameters(docstring: str | None) -> Set[str]:
    if not docstring:
        return set()
    parsed = NumpyDocString(docstring)
    return {name for name, _, _ in parsed["Parameters"]}


def _has_returns_section(docstring: str | None) -> bool:
    if not docstring:
        return False
    return bool(NumpyDocString(docstring)["Returns"])


def _needs_returns_documentation(sig: inspect.Signature) -> bool:
    annotation = sig.return_annotation
    if annotation is inspect.Signature.empty or annotation in {None, type(None)}:
        return False
    if isinstance(annotation, str):
        return annotation.strip().lower() not in {"none", "nonetype"}
    return True


_CALLABLES = _collect_callables(_collect_modules(linesman))


def _object_id(obj: object) -> str:
    module = getattr(obj, "__module__", "<unknown>")
    name = getattr(obj, "__qualname__", getattr(obj, "__name__", repr(obj)))
    return f"{module}.{name}"


def test_engine_modules_discovered() -> None:
    """The walk reaches into the engine subpackage."""
    names = {_object_id(obj) for obj in _CALLABLES}
    assert "linesman.engine.match_engine.OfficiatingEngine" in names


@pytest.mark.parametrize("obj", _CALLABLES, ids=_object_id)
def test_parameters_are_documented(obj: object) -> None:
    """Assert that every parameter in the signature is described in the docstring."""
    signature = _signature(obj)
    if signature is None:
        pytest.skip("No introspectable signature")

    params_to_check = [
        p
        for p in signature.parameters.values()
        if p.kind not in (p.VAR_POSITIONAL, p.VAR_KEYWORD) and p.name not in {"self", "cls"}
    ]
    if not params_to_check:
        pytest.skip("No parameters requiring documentation")

    documented = _documented_parameters(inspect.getdoc(obj))
    missing = [p.name for p in params_to_check if p.name not in documented]

    assert not missing, f"Docstring for {_object_id(obj)} is missing parameter entries: " + ", ".join(missing)


@pytest.mark.parametrize("obj", _CALLABLES, ids=_object_id)
def test_returns_are_documented(obj: object) -> None:
    """Require a Returns section whenever a function annotates a non-None value."""
    if inspect.isclass(obj):
        pytest.skip("Classes document their constructor parameters only")
    signature = _signature(obj)
    if signature is None or not _needs_returns_documentation(signature):
        pytest.skip("Return value does not require documentation")

    assert _has_returns_section(inspect.getdoc(obj)), f"Docstring for {_object_id(obj)} is missing a Returns section"
