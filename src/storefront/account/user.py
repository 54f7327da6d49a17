"""User aggregate: credentials, profile, shopping cart and wishlist.

The cart and wishlist live inside the user record. Both reference products by
id only; resolving those ids against the catalogue is the caller's job.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String

from storefront.account.events import (
    CartCleared,
    CartItemAdded,
    CartItemRemoved,
    PasswordChanged,
    ProfileUpdated,
    UserLoggedIn,
    UserRegistered,
    WishlistItemAdded,
    WishlistItemRemoved,
)
from storefront.domain import storefront

_FORBIDDEN_EMAIL_CHARACTERS = (" ", "\t", "\n", ";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


class Role(Enum):
    USER = "user"
    ADMIN = "admin"


class WishlistAction(Enum):
    ADDED = "added"
    REMOVED = "removed"


def _is_valid_email(email: str) -> bool:
    if email.count("@") != 1 or any(c in email for c in _FORBIDDEN_EMAIL_CHARACTERS):
        return False

    local_part, domain_part = email.split("@", 1)
    if not local_part or local_part.startswith(".") or local_part.endswith("."):
        return False
    if not domain_part or "." not in domain_part or domain_part.startswith(".") or domain_part.endswith("."):
        return False
    if ".." in email:
        return False
    return all(label and not label.startswith("-") and not label.endswith("-") for label in domain_part.split("."))


@storefront.value_object
class Actor:
    """The authenticated identity an operation is performed on behalf of."""

    user_id = String(required=True, max_length=255)
    role = String(choices=Role, default=Role.USER.value)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value


@storefront.entity(part_of="User")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@storefront.entity(part_of="User")
class WishlistItem:
    product_id = Identifier(required=True)
    added_at = DateTime()


@storefront.aggregate
class User:
    name = String(required=True, min_length=2, max_length=50)
    email = String(required=True, max_length=254)
    password_hash = String(required=True, max_length=255)
    role = String(choices=Role, default=Role.USER.value)
    avatar = String(max_length=500)
    cart_items = HasMany(CartItem)
    wishlist_items = HasMany(WishlistItem)
    last_login_at = DateTime()
    created_at = DateTime()

    @invariant.post
    def email_must_be_well_formed(self):
        if self.email and not _is_valid_email(self.email):
            raise ValidationError({"email": ["Please provide a valid email"]})

    @invariant.post
    def name_must_not_be_blank(self):
        if self.name is not None and len(self.name.strip()) < 2:
            raise ValidationError({"name": ["Name must be between 2 and 50 characters"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def register(cls, name, email, password_hash, role=Role.USER.value, avatar=None):
        now = datetime.now(UTC)
        user = cls(
            name=name.strip(),
            email=email.strip().lower(),
            password_hash=password_hash,
            role=role,
            avatar=avatar,
            created_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                email=user.email,
                name=user.name,
                role=user.role,
                registered_at=now,
            )
        )
        return user

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    def as_actor(self) -> Actor:
        return Actor(user_id=str(self.id), role=self.role)

    # -------------------------------------------------------------------
    # Profile and credentials
    # -------------------------------------------------------------------
    def record_login(self):
        now = datetime.now(UTC)
        self.last_login_at = now
        self.raise_(UserLoggedIn(user_id=str(self.id), logged_in_at=now))

    def update_profile(self, name=None, email=None, avatar=None):
        with atomic_change(self):
            if name is not None:
                self.name = name.strip()
            if email is not None:
                self.email = email.strip().lower()
            if avatar is not None:
                self.avatar = avatar

        self.raise_(ProfileUpdated(user_id=str(self.id), name=name, email=self.email, avatar=avatar))

    def change_password(self, password_hash):
        self.password_hash = password_hash
        self.raise_(PasswordChanged(user_id=str(self.id), changed_at=datetime.now(UTC)))

    # -------------------------------------------------------------------
    # Cart
    # -------------------------------------------------------------------
    def cart_line(self, product_id) -> CartItem | None:
        return next((i for i in self.cart_items if str(i.product_id) == str(product_id)), None)

    def add_to_cart(self, product_id, quantity=1):
        """Add ``quantity`` of a product, merging into an existing line for the same product."""
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        existing = self.cart_line(product_id)
        if existing:
            existing.quantity += quantity
            line_quantity = existing.quantity
        else:
            self.add_cart_items(
                CartItem(
                    product_id=str(product_id),
                    quantity=quantity,
                    added_at=datetime.now(UTC),
                )
            )
            line_quantity = quantity

        self.raise_(
            CartItemAdded(
                user_id=str(self.id),
                product_id=str(product_id),
                quantity=quantity,
                line_quantity=line_quantity,
            )
        )

    def remove_from_cart(self, product_id):
        """Drop the line for ``product_id``. Removing an absent product is a no-op."""
        existing = self.cart_line(product_id)
        if existing is None:
            return

        self.remove_cart_items(existing)
        self.raise_(CartItemRemoved(user_id=str(self.id), product_id=str(product_id)))

    def clear_cart(self):
        items = list(self.cart_items)
        for item in items:
            self.remove_cart_items(item)

        self.raise_(CartCleared(user_id=str(self.id), items_removed=len(items)))

    # -------------------------------------------------------------------
    # Wishlist
    # -------------------------------------------------------------------
    def wishlist_entry(self, product_id) -> WishlistItem | None:
        return next((i for i in self.wishlist_items if str(i.product_id) == str(product_id)), None)

    def toggle_wishlist(self, product_id) -> WishlistAction:
        """Add the product if absent, otherwise remove it."""
        existing = self.wishlist_entry(product_id)
        if existing:
            self.remove_wishlist_items(existing)
            self.raise_(WishlistItemRemoved(user_id=str(self.id), product_id=str(product_id)))
            return WishlistAction.REMOVED

        self.add_wishlist_items(WishlistItem(product_id=str(product_id), added_at=datetime.now(UTC)))
        self.raise_(WishlistItemAdded(user_id=str(self.id), product_id=str(product_id)))
        return WishlistAction.ADDED
