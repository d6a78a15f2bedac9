import importlib
import itertools
import sqlite3
import sys

import pytest

from sqlite_codegen import generate_files

USERS_SCHEMA = """
CREATE TABLE users (
    id INTEGER PRIMARY KEY,
    username TEXT NOT NULL,
    bio TEXT,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""

MEMBERSHIP_SCHEMA = """
CREATE TABLE memberships (
    role TEXT,
    org_id INTEGER NOT NULL,
    user_id INTEGER NOT NULL,
    joined REAL,
    PRIMARY KEY (user_id, org_id)
);
"""

EVENTS_SCHEMA = """
CREATE TABLE events (
    kind TEXT NOT NULL,
    payload JSONB,
    level INTEGER DEFAULT 1
);
"""

_package_ids = itertools.count()


@pytest.fixture
def users_schema():
    return USERS_SCHEMA


@pytest.fixture
def membership_schema():
    return MEMBERSHIP_SCHEMA


@pytest.fixture
def events_schema():
    return EVENTS_SCHEMA


@pytest.fixture
def full_schema():
    """Three tables covering a single key, a composite key and no key."""
    return USERS_SCHEMA + MEMBERSHIP_SCHEMA + EVENTS_SCHEMA


@pytest.fixture
def sqlite_conn():
    """Create an in-memory SQLite database for testing"""
    conn = sqlite3.connect(":memory:")
    yield conn
    conn.close()


@pytest.fixture
def generated_package(tmp_path, monkeypatch):
    """Generate Python code for a schema and import it as a package.

    Returns a loader ``load(schema_text, **config) -> module``. Each call
    writes to a fresh package name so modules never leak between tests.
    """
    loaded = []

    def load(schema_text, **config):
        package_name = f"generated_db_{next(_package_ids)}"
        generate_files(
            schema_text, tmp_path / package_name, language="python", config=config
        )
        monkeypatch.syspath_prepend(str(tmp_path))
        importlib.invalidate_caches()
        loaded.append(package_name)
        return importlib.import_module(package_name)

    yield load

    for name in list(sys.modules):
        if any(name == p or name.startswith(p + ".") for p in loaded):
            del sys.modules[name]
