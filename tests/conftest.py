import os
from pathlib import Path

import pytest

# Test layer per directory under tests/course_reviews/
LAYER_MARKERS = {
    "domain": pytest.mark.domain,
    "application": pytest.mark.application,
    "integration": pytest.mark.integration,
}


def pytest_addoption(parser):
    parser.addoption("--env", action="store", default="test", help="PROTEAN_ENV overlay to test against")


def pytest_sessionstart(session):
    """Choose the config overlay and email adapter before the domain is imported."""
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ.setdefault("EMAIL_ADAPTER", "fake")


def pytest_collection_modifyitems(config, items):
    for item in items:
        layer = next((part for part in Path(item.fspath).parts if part in LAYER_MARKERS), None)
        if layer is None:
            continue
        item.add_marker(LAYER_MARKERS[layer])
        if layer == "integration" and not item.get_closest_marker("fast"):
            item.add_marker(pytest.mark.slow)
