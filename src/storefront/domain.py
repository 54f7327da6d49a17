"""Storefront bounded context: catalogue, customer accounts and orders.

Products, users (with their carts and wishlists) and orders all live in this
one domain. Every state change goes through a command processed synchronously
by its handler, so one handler call is one unit of work.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging

configure_logging()

storefront = Domain(name="storefront")
