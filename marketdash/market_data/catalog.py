# marketdash/market_data/catalog.py
"""
Static catalog backing the synthetic data generator.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass(frozen=True)
class CatalogStock:
    symbol: str
    name: str
    sector: str
    exchange: str
    base_price: float


@dataclass(frozen=True)
class CatalogIndex:
    symbol: str
    name: str
    base_value: float


STOCKS: List[CatalogStock] = [
    # Technology
    CatalogStock("AAPL", "Apple Inc.", "Technology", "NASDAQ", 178.50),
    CatalogStock("MSFT", "Microsoft Corporation", "Technology", "NASDAQ", 378.90),
    CatalogStock("GOOGL", "Alphabet Inc.", "Technology", "NASDAQ", 141.25),
    CatalogStock("AMZN", "Amazon.com Inc.", "Technology", "NASDAQ", 178.35),
    CatalogStock("META", "Meta Platforms Inc.", "Technology", "NASDAQ", 505.75),
    CatalogStock("NVDA", "NVIDIA Corporation", "Technology", "NASDAQ", 875.50),
    CatalogStock("TSLA", "Tesla Inc.", "Technology", "NASDAQ", 245.80),
    CatalogStock("AMD", "Advanced Micro Devices", "Technology", "NASDAQ", 165.40),
    CatalogStock("INTC", "Intel Corporation", "Technology", "NASDAQ", 43.25),
    CatalogStock("CRM", "Salesforce Inc.", "Technology", "NYSE", 267.80),
    CatalogStock("ORCL", "Oracle Corporation", "Technology", "NYSE", 125.60),
    CatalogStock("ADBE", "Adobe Inc.", "Technology", "NASDAQ", 578.90),
    CatalogStock("CSCO", "Cisco Systems Inc.", "Technology", "NASDAQ", 48.75),
    CatalogStock("IBM", "IBM Corporation", "Technology", "NYSE", 168.45),
    CatalogStock("NFLX", "Netflix Inc.", "Technology", "NASDAQ", 485.30),
    # Finance
    CatalogStock("JPM", "JPMorgan Chase & Co.", "Finance", "NYSE", 195.40),
    CatalogStock("V", "Visa Inc.", "Finance", "NYSE", 278.90),
    CatalogStock("MA", "Mastercard Inc.", "Finance", "NYSE", 458.25),
    CatalogStock("BAC", "Bank of America Corp.", "Finance", "NYSE", 37.80),
    CatalogStock("WFC", "Wells Fargo & Co.", "Finance", "NYSE", 57.45),
    CatalogStock("GS", "Goldman Sachs Group", "Finance", "NYSE", 385.60),
    CatalogStock("MS", "Morgan Stanley", "Finance", "NYSE", 98.75),
    CatalogStock("AXP", "American Express Co.", "Finance", "NYSE", 215.30),
    CatalogStock("BLK", "BlackRock Inc.", "Finance", "NYSE", 785.40),
    CatalogStock("SCHW", "Charles Schwab Corp.", "Finance", "NYSE", 72.15),
    # Healthcare
    CatalogStock("JNJ", "Johnson & Johnson", "Healthcare", "NYSE", 158.90),
    CatalogStock("UNH", "UnitedHealth Group", "Healthcare", "NYSE", 528.45),
    CatalogStock("PFE", "Pfizer Inc.", "Healthcare", "NYSE", 28.65),
    CatalogStock("ABBV", "AbbVie Inc.", "Healthcare", "NYSE", 175.80),
    CatalogStock("MRK", "Merck & Co. Inc.", "Healthcare", "NYSE", 125.40),
    CatalogStock("LLY", "Eli Lilly and Co.", "Healthcare", "NYSE", 785.60),
    CatalogStock("TMO", "Thermo Fisher Scientific", "Healthcare", "NYSE", 565.25),
    CatalogStock("ABT", "Abbott Laboratories", "Healthcare", "NYSE", 108.90),
    CatalogStock("DHR", "Danaher Corporation", "Healthcare", "NYSE", 248.75),
    CatalogStock("BMY", "Bristol-Myers Squibb", "Healthcare", "NYSE", 52.30),
    # Consumer
    CatalogStock("WMT", "Walmart Inc.", "Consumer", "NYSE", 165.80),
    CatalogStock("PG", "Procter & Gamble Co.", "Consumer", "NYSE", 158.45),
    CatalogStock("KO", "Coca-Cola Company", "Consumer", "NYSE", 62.75),
    CatalogStock("PEP", "PepsiCo Inc.", "Consumer", "NASDAQ", 178.90),
    CatalogStock("COST", "Costco Wholesale", "Consumer", "NASDAQ", 725.60),
    CatalogStock("MCD", "McDonald's Corporation", "Consumer", "NYSE", 298.45),
    CatalogStock("NKE", "Nike Inc.", "Consumer", "NYSE", 98.75),
    CatalogStock("SBUX", "Starbucks Corporation", "Consumer", "NASDAQ", 95.40),
    CatalogStock("HD", "Home Depot Inc.", "Consumer", "NYSE", 385.60),
    CatalogStock("LOW", "Lowe's Companies", "Consumer", "NYSE", 248.90),
    # Energy
    CatalogStock("XOM", "Exxon Mobil Corp.", "Energy", "NYSE", 108.75),
    CatalogStock("CVX", "Chevron Corporation", "Energy", "NYSE", 155.40),
    CatalogStock("COP", "ConocoPhillips", "Energy", "NYSE", 118.25),
    CatalogStock("SLB", "Schlumberger Ltd.", "Energy", "NYSE", 52.80),
    CatalogStock("EOG", "EOG Resources Inc.", "Energy", "NYSE", 128.45),
    # Industrial
    CatalogStock("CAT", "Caterpillar Inc.", "Industrial", "NYSE", 345.60),
    CatalogStock("BA", "Boeing Company", "Industrial", "NYSE", 215.80),
    CatalogStock("GE", "General Electric Co.", "Industrial", "NYSE", 158.45),
    CatalogStock("MMM", "3M Company", "Industrial", "NYSE", 108.75),
    CatalogStock("UPS", "United Parcel Service", "Industrial", "NYSE", 148.90),
    CatalogStock("HON", "Honeywell International", "Industrial", "NASDAQ", 205.60),
    CatalogStock("RTX", "RTX Corporation", "Industrial", "NYSE", 98.45),
    CatalogStock("LMT", "Lockheed Martin Corp.", "Industrial", "NYSE", 465.80),
    # Communications
    CatalogStock("VZ", "Verizon Communications", "Communications", "NYSE", 42.75),
    CatalogStock("T", "AT&T Inc.", "Communications", "NYSE", 17.85),
    CatalogStock("TMUS", "T-Mobile US Inc.", "Communications", "NASDAQ", 165.40),
    CatalogStock("DIS", "Walt Disney Company", "Communications", "NYSE", 108.90),
    CatalogStock("CMCSA", "Comcast Corporation", "Communications", "NASDAQ", 42.65),
    # Crypto
    CatalogStock("COIN", "Coinbase Global Inc.", "Crypto", "NASDAQ", 245.80),
    CatalogStock("MARA", "Marathon Digital", "Crypto", "NASDAQ", 24.65),
    CatalogStock("RIOT", "Riot Platforms Inc.", "Crypto", "NASDAQ", 12.85),
]

INDICES: List[CatalogIndex] = [
    CatalogIndex("SPX", "S&P 500", 5125.40),
    CatalogIndex("DJI", "Dow Jones", 38875.50),
    CatalogIndex("IXIC", "NASDAQ", 16245.80),
    CatalogIndex("RUT", "Russell 2000", 2045.60),
]

DEFAULT_SYMBOLS: List[str] = [
    "AAPL", "MSFT", "GOOGL", "AMZN", "NVDA", "META", "TSLA",
    "JPM", "JNJ", "V", "UNH", "HD", "PG", "MA", "NFLX",
]

TRENDING_SYMBOLS: List[str] = DEFAULT_SYMBOLS + ["AMD", "INTC", "CRM", "BA", "GS", "XOM", "CVX"]

# Sectors without a regular cash dividend
NON_DIVIDEND_SECTORS = {"Crypto"}

SECTOR_INDUSTRIES: Dict[str, str] = {
    "Technology": "Software & Hardware",
    "Finance": "Banks & Financial Services",
    "Healthcare": "Pharmaceuticals & Health Services",
    "Consumer": "Consumer Goods & Retail",
    "Energy": "Oil & Gas",
    "Industrial": "Industrial Machinery & Aerospace",
    "Communications": "Telecom & Media",
    "Crypto": "Digital Asset Services",
}

INSTITUTION_POOL: List[str] = [
    "Vanguard Group Inc.",
    "BlackRock Inc.",
    "State Street Corporation",
    "FMR LLC",
    "Geode Capital Management",
    "T. Rowe Price Associates",
    "Morgan Stanley",
    "Northern Trust Corporation",
    "JPMorgan Chase & Co.",
    "Bank of America Corporation",
    "Wellington Management",
    "Capital Research Global Investors",
]

INSIDER_ROLES: List[str] = [
    "Chief Executive Officer",
    "Chief Financial Officer",
    "Chief Operating Officer",
    "Director",
    "General Counsel",
    "SVP, Engineering",
]

INSIDER_FIRST_NAMES = ["James", "Mary", "Robert", "Patricia", "Michael", "Linda", "David", "Susan"]
INSIDER_LAST_NAMES = ["Smith", "Johnson", "Chen", "Garcia", "Miller", "Patel", "Nguyen", "Brown"]

_BY_SYMBOL: Dict[str, CatalogStock] = {s.symbol: s for s in STOCKS}


def find_stock(symbol: str) -> Optional[CatalogStock]:
    return _BY_SYMBOL.get(symbol.upper())


def sectors() -> List[str]:
    """Catalog sectors in first-seen order."""
    seen: List[str] = []
    for stock in STOCKS:
        if stock.sector not in seen:
            seen.append(stock.sector)
    return seen
