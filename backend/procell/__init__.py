"""
ProCell Backend

Caching primitives and checkout arithmetic for the ProCell storefront.
"""

__version__ = "0.1.0"
