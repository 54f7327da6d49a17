"""Account registration and login."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.account.auth import MIN_PASSWORD_LENGTH, hash_password, issue_token, verify_password
from storefront.account.repository import require_user
from storefront.account.user import Role, User
from storefront.domain import storefront
from storefront.errors import Unauthenticated
from storefront.utils.locks import user_locks
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="User")
class RegisterUser:
    name = String(required=True, max_length=50)
    email = String(required=True, max_length=254)
    password_hash = String(required=True, max_length=255)
    role = String(choices=Role, default=Role.USER.value)


@storefront.command(part_of="User")
class RecordLogin:
    user_id = Identifier(required=True)


@storefront.command_handler(part_of=User)
class RegistrationHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            raise ValidationError({"email": ["User already exists with this email"]})

        user = User.register(
            name=command.name,
            email=command.email,
            password_hash=command.password_hash,
            role=command.role,
        )
        repo.add(user)
        logger.info("User registered", user_id=str(user.id), role=user.role)
        return str(user.id)

    @handle(RecordLogin)
    def record_login(self, command):
        repo = current_domain.repository_for(User)
        user = require_user(command.user_id)
        user.record_login()
        repo.add(user)


def register(name: str, email: str, password: str, role: str = Role.USER.value) -> tuple[User, str]:
    """Create an account and return it with a fresh bearer token."""
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError({"password": [f"Password must be at least {MIN_PASSWORD_LENGTH} characters"]})

    user_id = current_domain.process(
        RegisterUser(name=name, email=email, password_hash=hash_password(password), role=role),
        asynchronous=False,
    )
    return require_user(user_id), issue_token(user_id)


def login(email: str, password: str) -> tuple[User, str]:
    """Check credentials and return the user with a fresh bearer token."""
    user = current_domain.repository_for(User).find_by_email(email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Login rejected", email=(email or "").lower())
        raise Unauthenticated("Invalid credentials")

    with user_locks.hold(user.id):
        current_domain.process(RecordLogin(user_id=str(user.id)), asynchronous=False)
        return require_user(user.id), issue_token(user.id)
