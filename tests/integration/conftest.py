"""Pytest configuration and fixtures for integration tests.

Loads .env and skips the whole suite when no Gemini credentials are
configured. Integration tests always run against the in-memory store so
they never write to Firestore.
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv


def pytest_configure(config):
    """Load .env from the project root and force the in-memory store."""
    env_path = Path(__file__).parent.parent.parent / ".env"
    load_dotenv(env_path)

    os.environ["STORE_BACKEND"] = "memory"

    print("\n" + "=" * 70)
    print("Note: These tests require valid GEMINI_API_KEY (or USE_VERTEXAI + GOOGLE_CLOUD_PROJECT)")
    print(f"Environment loaded from: {env_path}")
    print("  - Recipe store: in-memory")
    print("=" * 70 + "\n")


@pytest.fixture(scope="session", autouse=True)
def check_api_keys():
    """Skip integration tests if no Gemini credentials are configured."""
    use_vertexai = os.getenv("USE_VERTEXAI", "false").lower() in ("true", "1", "yes")
    if use_vertexai and os.getenv("GOOGLE_CLOUD_PROJECT"):
        return
    if not use_vertexai and os.getenv("GEMINI_API_KEY"):
        return
    pytest.skip(
        "Integration tests skipped. Missing GEMINI_API_KEY (or GOOGLE_CLOUD_PROJECT for Vertex AI). "
        "Please set it in your .env file.",
        allow_module_level=True,
    )
