"""
Shared test fixtures.
"""

from __future__ import annotations

import pytest

from jsonmend.config.settings import Settings, get_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Clear cached settings so each test sees its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Default settings, independent of any .env in the working tree."""
    return Settings(_env_file=None)


@pytest.fixture
def valid_documents() -> list[str]:
    """Standard JSON documents covering every value type."""
    return [
        '{"name": "张三", "age": 25}',
        '{"b": 1, "a": 2, "nested": {"z": [1, 2.5, -3e-7], "y": null}}',
        "[true, false, null, 0, -1, 1.25, \"\"]",
        '"a \\"quoted\\" string with \\\\ and \\n"',
        "123456789012345678901234567890",
        "{}",
        "[[], {}, [[]]]",
        '{"unicode": "caf\\u00e9 \\ud83d\\ude00", "ctrl": "\\u0001\\t"}',
        "1" * 5000,
        "[" + "9" * 4400 + "]",
        "1e400",
        '{"wide": -2.5E+999, "n": 1}',
    ]


@pytest.fixture
def relaxed_document() -> str:
    """Relaxed syntax the lenient parser must accept without repair."""
    return '{ name: "A", }  // trailing comma and comment'


@pytest.fixture
def repairable_document() -> str:
    """Unquoted string value: rejected by the lenient grammar, fixed by repair."""
    return "{name: 张三, age: 25}"


@pytest.fixture
def mismatched_document() -> str:
    """Mismatched brackets: beyond repair."""
    return "{name: 张三, age: 25]"
