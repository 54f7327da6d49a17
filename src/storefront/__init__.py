"""Storefront: catalogue, customer accounts, carts, wishlists and orders."""
