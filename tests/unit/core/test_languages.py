"""Unit tests for core/languages.py"""

import pytest

from mdsite.core.languages import language_for


@pytest.mark.parametrize("path,expected", [
    ("examples/hello_world.rs", "rust"),
    ("src/app.py", "python"),
    ("config.yaml", "yaml"),
    ("config.yml", "yaml"),
    ("Cargo.lock", "toml"),
    ("site/.gitignore", "gitignore"),
])
def test_language_for_known(path, expected):
    """Known extensions and basenames map to their fence label."""
    assert language_for(path) == expected


@pytest.mark.parametrize("path", ["data.xyz", "Makefile", "README"])
def test_language_for_unknown(path):
    """Unclassifiable paths return None."""
    assert language_for(path) is None
