"""Shared fixtures for web2rag tests."""

import pytest

from tests.helpers import DOCS_PAGE


@pytest.fixture
def docs_page() -> str:
    return DOCS_PAGE
