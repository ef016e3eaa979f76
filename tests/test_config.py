"""Tests for framework configuration."""
import logging

import pytest

from hinj import (
    get_debug_label,
    get_debug_level,
    reset_config,
    set_debug_label,
    set_debug_level,
)


def test_defaults():
    assert get_debug_label() == "-state-"
    assert get_debug_level() == logging.INFO


def test_set_label():
    set_debug_label("trace")
    assert get_debug_label() == "trace"


def test_empty_label_rejected():
    with pytest.raises(ValueError):
        set_debug_label("")


def test_level_by_name_or_number():
    set_debug_level("warning")
    assert get_debug_level() == logging.WARNING
    set_debug_level(logging.DEBUG)
    assert get_debug_level() == logging.DEBUG


def test_unknown_level_name_rejected():
    with pytest.raises(ValueError):
        set_debug_level("LOUD")


def test_reset_config():
    set_debug_label("x")
    set_debug_level(logging.ERROR)
    reset_config()
    assert get_debug_label() == "-state-"
    assert get_debug_level() == logging.INFO
