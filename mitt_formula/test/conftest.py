"""Shared fixtures: release archives, fake mitt binaries, release rows."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from mitt_formula.formula.model import PlatformKey, Release
from mitt_formula.formula.table import FormulaInfo
from mitt_formula.test._support import (
    FORMULA_INFO,
    build_archive,
    help_script,
    make_release,
    platform_archive,
)


@pytest.fixture
def release_factory() -> Callable[..., Release]:
    return make_release


@pytest.fixture
def archive_factory() -> Callable[..., bytes]:
    return build_archive


@pytest.fixture
def script_factory() -> Callable[..., bytes]:
    return help_script


@pytest.fixture
def platform_archive_factory() -> Callable[[str, PlatformKey], bytes]:
    return platform_archive


@pytest.fixture
def formula_info() -> FormulaInfo:
    return FORMULA_INFO
