"""
Pytest configuration and shared builders.

Registers the integration marker and its command-line switch, and provides
helpers to build DocumentAnalysis inputs without the Azure SDK.
"""

import pytest

from src.services.amounts import parse_standalone_price
from src.services.document_types import DocumentAnalysis, DocumentLine, DocumentPage


def pytest_addoption(parser):
    """Add custom command-line options"""
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run integration tests against real Azure resources"
    )


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test requiring real Azure resources"
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --run-integration is specified"""
    if config.getoption("--run-integration"):
        return

    skip_integration = pytest.mark.skip(reason="need --run-integration option to run")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


def make_line(text, x_left=1.0, x_right=None, y=0.0):
    """A detected line with a rectangular polygon spanning x_left..x_right."""
    x_right = x_left + 2.0 if x_right is None else x_right
    polygon = (x_left, y, x_right, y, x_right, y + 0.2, x_left, y + 0.2)
    return DocumentLine(content=text, polygon=polygon)


@pytest.fixture
def make_page():
    """One page with lines top to bottom; standalone prices sit in a right-hand column."""
    def _make(*texts):
        lines = []
        for i, text in enumerate(texts):
            x_left = 6.0 if parse_standalone_price(text) is not None else 1.0
            lines.append(make_line(text, x_left=x_left, y=float(i)))
        return DocumentPage(lines=tuple(lines))
    return _make


@pytest.fixture
def make_document():
    def _make(fields=None, pages=(), content="", paragraphs=()):
        return DocumentAnalysis(
            documents=(fields,) if fields is not None else (),
            pages=tuple(pages),
            content=content,
            paragraphs=tuple(paragraphs),
        )
    return _make
