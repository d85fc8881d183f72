"""toolrouter - LLM tool selection and dispatch for a crypto chat assistant."""

__version__ = "0.1.0"
