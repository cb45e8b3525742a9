# marketdash/__init__.py
"""
MarketDash - stock market dashboard backend.
Quotes, charts, fundamentals, news and AI insights over a JSON API.
"""

__version__ = "0.1.0"
