"""Tests for loguru setup helpers."""

from types import SimpleNamespace

import pytest

from memefactory.core.logging import _health_log_filter


@pytest.mark.parametrize(
    "message,level,kept",
    [
        ('127.0.0.1 - "GET /health HTTP/1.1" 200', 20, False),
        ('127.0.0.1 - "GET /health HTTP/1.1" 200', 10, True),
        ('127.0.0.1 - "POST /api/generate HTTP/1.1" 200', 20, True),
    ],
)
def test_health_lines_hidden_above_debug(message, level, kept):
    record = {"message": message, "level": SimpleNamespace(no=level)}

    assert _health_log_filter(record) is kept
