"""Catalog module: categories, products and their images."""
