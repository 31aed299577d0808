"""Store module for e-commerce functionality.

Provides the shopping cart, Stripe checkout and order management.
"""
