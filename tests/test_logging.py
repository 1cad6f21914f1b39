import logging

import pytest
import structlog

from exporter.observability.logging import _resolve_level, build_renderer


def test_level_names_are_case_insensitive() -> None:
    assert _resolve_level("debug") == logging.DEBUG
    assert _resolve_level(" Warning ") == logging.WARNING
    assert _resolve_level(logging.ERROR) == logging.ERROR


def test_unknown_level_name_raises() -> None:
    with pytest.raises(ValueError):
        _resolve_level("chatty")


def test_renderer_follows_log_format() -> None:
    assert isinstance(build_renderer("json"), structlog.processors.JSONRenderer)
    assert isinstance(build_renderer("console"), structlog.dev.ConsoleRenderer)
    with pytest.raises(ValueError):
        build_renderer("xml")
