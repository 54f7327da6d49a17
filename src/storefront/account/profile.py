"""Profile maintenance: contact details and password changes."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.account.auth import MIN_PASSWORD_LENGTH, hash_password, verify_password
from storefront.account.repository import require_user
from storefront.account.user import User
from storefront.domain import storefront
from storefront.utils.locks import user_locks


@storefront.command(part_of="User")
class UpdateProfile:
    user_id = Identifier(required=True)
    name = String(max_length=50)
    email = String(max_length=254)
    avatar = String(max_length=500)


@storefront.command(part_of="User")
class ChangePassword:
    user_id = Identifier(required=True)
    password_hash = String(required=True, max_length=255)


@storefront.command_handler(part_of=User)
class ProfileHandler:
    @handle(UpdateProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(User)
        user = require_user(command.user_id)

        if command.email is not None:
            holder = repo.find_by_email(command.email)
            if holder is not None and str(holder.id) != str(user.id):
                raise ValidationError({"email": ["User already exists with this email"]})

        user.update_profile(name=command.name, email=command.email, avatar=command.avatar)
        repo.add(user)

    @handle(ChangePassword)
    def change_password(self, command):
        repo = current_domain.repository_for(User)
        user = require_user(command.user_id)
        user.change_password(command.password_hash)
        repo.add(user)


def update_profile(user_id, name=None, email=None, avatar=None) -> User:
    with user_locks.hold(user_id):
        current_domain.process(
            UpdateProfile(user_id=str(user_id), name=name, email=email, avatar=avatar),
            asynchronous=False,
        )
        return require_user(user_id)


def change_password(user_id, current_password: str, new_password: str) -> None:
    if not new_password or len(new_password) < MIN_PASSWORD_LENGTH:
        raise ValidationError({"new_password": [f"Password must be at least {MIN_PASSWORD_LENGTH} characters"]})

    with user_locks.hold(user_id):
        user = require_user(user_id)
        if not verify_password(current_password, user.password_hash):
            raise ValidationError({"current_password": ["Current password is incorrect"]})

        current_domain.process(
            ChangePassword(user_id=str(user_id), password_hash=hash_password(new_password)),
            asynchronous=False,
        )
