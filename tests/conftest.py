import io
import os
import sys

import pytest

# Add the lib directory to the path so the tests run without installing
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'lib'))


def pytest_configure(config):
    # Register custom markers
    config.addinivalue_line(
        "markers", "network: marks tests as requiring network access (may be slow)"
    )


@pytest.fixture
def stream():
    """Builds a binary stream from text, the way files are usually read."""
    def make(text):
        return io.BytesIO(text.encode('utf-8'))
    return make
