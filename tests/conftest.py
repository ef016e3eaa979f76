"""Pytest configuration and shared fixtures."""
import pytest
from dataclasses import dataclass, field
from typing import List

import hinj.config as config_module


@dataclass
class Document:
    """Test record - plain dataclass carrying hinge slots in its __dict__."""
    title: str = "untitled"
    tags: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class FrozenDocument:
    """Test record - frozen dataclass, slots must bypass __setattr__."""
    title: str = "frozen"


@pytest.fixture(autouse=True)
def reset_framework_config():
    """Restore module-level configuration after each test."""
    original_label = config_module._debug_label
    original_level = config_module._debug_level

    yield

    config_module._debug_label = original_label
    config_module._debug_level = original_level


@pytest.fixture
def record():
    """Provide an empty mapping instance."""
    return {}


@pytest.fixture
def document():
    """Provide a dataclass instance."""
    return Document(title="report")


@pytest.fixture
def calls():
    """Collect stage invocations as (name, value) tuples."""
    return []


@pytest.fixture
def frozen_document():
    """Provide a frozen dataclass instance."""
    return FrozenDocument()
