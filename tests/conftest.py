"""Pytest configuration for SchemaMold tests."""

import logging

import pytest

from schemamold.schema.core import ArrayField, BooleanField, NumberField, ObjectField, StringField


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep rich output unwrapped and config lookups away from the real home directory."""
    monkeypatch.setenv("COLUMNS", "200")
    monkeypatch.setenv("SCHEMAMOLD_CONFIG", str(tmp_path / "missing-config.ini"))
    monkeypatch.setattr("schemamold.config.user_config_dir", lambda *args, **kwargs: str(tmp_path / "xdg"))
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handlers installed by CLI invocations, whose stderr is closed afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def person_schema():
    """The person form used throughout the tests."""
    return ObjectField(
        label="Person",
        order=["name", "age", "subscribe", "favorites"],
        properties={
            "name": StringField(label="Full name", required=True, min_length=1),
            "age": NumberField(label="Age", required=True, min=0, max=150),
            "subscribe": BooleanField(label="Subscribe to newsletter?"),
            "favorites": ObjectField(
                label="Favorites",
                properties={
                    "color": StringField(label="Favorite color"),
                    "foods": ArrayField(label="Favorite foods", items=StringField(label="Food")),
                },
            ),
        },
    )
