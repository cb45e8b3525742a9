# marketdash/services/__init__.py
"""AI services (Gemini, Hugging Face) and their deterministic fallbacks."""
