"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    __version__ = "v1"

    user_id = Identifier(required=True)
    email = String(required=True)
    name = String(required=True)
    role = String(required=True)
    registered_at = DateTime(required=True)


@storefront.event(part_of="User")
class UserLoggedIn:
    __version__ = "v1"

    user_id = Identifier(required=True)
    logged_in_at = DateTime(required=True)


@storefront.event(part_of="User")
class ProfileUpdated:
    __version__ = "v1"

    user_id = Identifier(required=True)
    name = String()
    email = String()
    avatar = String()


@storefront.event(part_of="User")
class PasswordChanged:
    __version__ = "v1"

    user_id = Identifier(required=True)
    changed_at = DateTime(required=True)


@storefront.event(part_of="User")
class CartItemAdded:
    __version__ = "v1"

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    line_quantity = Integer(required=True)


@storefront.event(part_of="User")
class CartItemRemoved:
    __version__ = "v1"

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.event(part_of="User")
class CartCleared:
    __version__ = "v1"

    user_id = Identifier(required=True)
    items_removed = Integer(required=True)


@storefront.event(part_of="User")
class WishlistItemAdded:
    __version__ = "v1"

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.event(part_of="User")
class WishlistItemRemoved:
    __version__ = "v1"

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
