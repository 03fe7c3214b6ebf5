"""Root conftest — shared test configuration."""

import os

# Ensure tests don't accidentally use real API keys
os.environ.setdefault("OPENAI_API_KEY", "sk-test-fake-key")
os.environ["TAVILY_API_KEY"] = ""
os.environ.setdefault("LOG_FORMAT", "text")
