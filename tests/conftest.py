import pytest

from field_formatter.config import default_config
from field_formatter.parsing.registry import GrammarRegistry
from field_formatter.schemas import SectionTypeConfig


@pytest.fixture
def config():
    return default_config()


@pytest.fixture
def registry():
    return GrammarRegistry.builtin()


@pytest.fixture
def generic_section(config):
    return config.section_type("generic")


@pytest.fixture
def section_of():
    """Build a section config allowing `row_types`, in that precedence order."""

    def make(*row_types: str, **kwargs) -> SectionTypeConfig:
        return SectionTypeConfig(
            label="Test", allowed_row_types=list(row_types), **kwargs
        )

    return make


@pytest.fixture
def decrement_config(config):
    """Default config where items fall back to text when their count hits zero."""
    config.row_types["item"].transitions["decrement_zero"] = "text"
    return config
