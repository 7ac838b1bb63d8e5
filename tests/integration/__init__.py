"""
Integration tests that call the real generation backend.

These tests are slow and cost API quota - run selectively:
    pytest tests/integration/ -v

Requires GEMINI_API_KEY in the environment or .env.
"""
