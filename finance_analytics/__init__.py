"""
finance_analytics
~~~~~~~~~~~~~~~~~

Budget health and financial insights computed from a user's categorized
transactions, served over FastAPI.
"""

__version__ = "1.0.0"
