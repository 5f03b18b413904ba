# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import json
from pathlib import Path

import pytest

from genro_filestore import FileStore


@pytest.fixture
def store(tmp_path: Path) -> FileStore:
    """A compact store backed by a fresh file under tmp_path."""
    return FileStore(tmp_path / 'db.json')


@pytest.fixture
def read_file():
    """Decode the JSON file behind a store, bypassing the store API."""

    def _read(store: FileStore):
        return json.loads(store.path.read_text(encoding='utf-8'))

    return _read
