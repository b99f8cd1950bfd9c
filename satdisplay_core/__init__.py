"""
SatDisplay - display-unit selection and amount formatting for a Bitcoin client.

Key features:
- Cycle the wallet display between sats, BTC and a fiat currency
- Split amounts into widget-ready parts or render finished strings
- Locale rules per fiat currency (symbol side, spacing, separators)
- TOML + environment configuration
"""

__version__ = "1.0.0"
__all__ = [
    "config",
    "fiat",
    "logging_config",
    "precision",
    "units",
]
