"""
Margin simulation engine for profitability governance.
"""

__version__ = "1.0.0"
