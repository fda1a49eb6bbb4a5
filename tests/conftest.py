# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Shared fixtures: every test starts from default settings."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from genro_parseurl.config import get_settings


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """No config file, no GENRO_PARSEURL_* variables, fresh settings cache."""
    for name in ("GENRO_PARSEURL_CONFIG", "GENRO_PARSEURL_BASE", "GENRO_PARSEURL_PRIMITIVE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
