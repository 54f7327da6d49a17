"""Product resolution used by the cart, wishlist and order handlers."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.errors import NotFound


def find_product(product_id) -> Product | None:
    if not product_id:
        return None
    try:
        return current_domain.repository_for(Product).get(str(product_id))
    except ObjectNotFoundError:
        return None


def product_exists(product_id) -> bool:
    return find_product(product_id) is not None


def require_product(product_id) -> Product:
    """Return the product or raise ``NotFound`` naming the missing id."""
    product = find_product(product_id)
    if product is None:
        raise NotFound(f"Product not found: {product_id}")
    return product
