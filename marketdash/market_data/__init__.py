# marketdash/market_data/__init__.py
"""
Market Data Layer
Catalog, synthetic generators, chart and news builders, and the
provider abstraction with its synthetic and Yahoo Finance adapters.
"""
