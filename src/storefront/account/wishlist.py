"""Wishlist toggle: one call adds a product, the next call removes it."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.account.repository import require_user
from storefront.account.user import User, WishlistAction
from storefront.catalogue.lookup import find_product, require_product
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.utils.locks import user_locks


@storefront.command(part_of="User")
class ToggleWishlist:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command_handler(part_of=User)
class WishlistHandler:
    @handle(ToggleWishlist)
    def toggle_wishlist(self, command):
        repo = current_domain.repository_for(User)
        user = require_user(command.user_id)

        # Only additions need a live product; stale entries must stay removable.
        if user.wishlist_entry(command.product_id) is None:
            require_product(command.product_id)

        action = user.toggle_wishlist(command.product_id)
        repo.add(user)
        return action.value


def populated_wishlist(user: User) -> list[Product]:
    products = []
    for item in user.wishlist_items:
        product = find_product(item.product_id)
        if product is not None:
            products.append(product)
    return products


def toggle_wishlist(user_id, product_id) -> tuple[WishlistAction, User]:
    with user_locks.hold(user_id):
        action = current_domain.process(
            ToggleWishlist(user_id=str(user_id), product_id=str(product_id)),
            asynchronous=False,
        )
        return WishlistAction(action), require_user(user_id)
