"""
Storefront data-access layer.

Generic SQLAlchemy repository over the User / Product / Category store.
"""

__version__ = "0.1.0"
