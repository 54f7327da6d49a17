"""Shopping cart commands, handler and the locked entry points used by the API.

Cart lines merge on add: a product appears at most once and repeated adds
increase its quantity. The whole read-modify-write for one user runs under
that user's lock, so concurrent adds never lose an increment.
"""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.account.repository import require_user
from storefront.account.user import CartItem, User
from storefront.catalogue.lookup import find_product, require_product
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.utils.locks import user_locks


@storefront.command(part_of="User")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(default=1, min_value=1)


@storefront.command(part_of="User")
class RemoveFromCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="User")
class ClearCart:
    user_id = Identifier(required=True)


@storefront.command_handler(part_of=User)
class ManageCartHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(User)
        user = require_user(command.user_id)
        require_product(command.product_id)
        user.add_to_cart(product_id=command.product_id, quantity=command.quantity)
        repo.add(user)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(User)
        user = require_user(command.user_id)
        user.remove_from_cart(command.product_id)
        repo.add(user)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(User)
        user = require_user(command.user_id)
        user.clear_cart()
        repo.add(user)


def populated_cart(user: User) -> list[tuple[CartItem, Product]]:
    """Pair each cart line with its product. Lines whose product is gone are left out."""
    lines = []
    for item in user.cart_items:
        product = find_product(item.product_id)
        if product is not None:
            lines.append((item, product))
    return lines


def add_to_cart(user_id, product_id, quantity: int = 1) -> User:
    with user_locks.hold(user_id):
        current_domain.process(
            AddToCart(user_id=str(user_id), product_id=str(product_id), quantity=quantity),
            asynchronous=False,
        )
        return require_user(user_id)


def remove_from_cart(user_id, product_id) -> User:
    with user_locks.hold(user_id):
        current_domain.process(
            RemoveFromCart(user_id=str(user_id), product_id=str(product_id)),
            asynchronous=False,
        )
        return require_user(user_id)


def clear_cart(user_id) -> User:
    with user_locks.hold(user_id):
        current_domain.process(ClearCart(user_id=str(user_id)), asynchronous=False)
        return require_user(user_id)
