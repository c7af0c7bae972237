"""
                Bistro Boss Ordering API

Restaurant ordering backend over MongoDB: menu catalog, reviews,
shopping carts and Stripe payments behind bearer-token auth.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
