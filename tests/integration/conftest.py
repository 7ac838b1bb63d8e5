"""Pytest configuration for tests against the real generation backend."""

import os
import pytest
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


@pytest.fixture(scope="session")
def google_api_available():
    """Check if the Gemini API key is available."""
    return bool(os.getenv("GEMINI_API_KEY"))


@pytest.fixture(autouse=True)
def skip_if_no_google_api(request, google_api_available):
    """Skip tests marked with requires_google_api if key not set."""
    if request.node.get_closest_marker("requires_google_api"):
        if not google_api_available:
            pytest.skip("GEMINI_API_KEY not set")
