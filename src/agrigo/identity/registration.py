"""User registration: command and handler."""

import structlog
from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from agrigo.domain import agrigo
from agrigo.errors import DuplicateAccount
from agrigo.identity.passwords import hash_password
from agrigo.identity.user import User, UserRole
from agrigo.utils.concurrency import serialized_writes

logger = structlog.get_logger(__name__)


@agrigo.command(part_of="User")
class RegisterUser:
    name: String(required=True, max_length=150)
    email: String(required=True, max_length=254)
    password: String(required=True, max_length=128)
    phone: String(required=True, max_length=20)
    role: String(choices=UserRole, default=UserRole.CONSUMER.value)
    farm_name: String(max_length=200)


@agrigo.command_handler(part_of=User)
class RegisterUserHandler:
    @serialized_writes
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            raise DuplicateAccount()

        user = User.register(
            name=command.name,
            email=command.email,
            phone=command.phone,
            password_hash=hash_password(command.password),
            role=command.role,
            farm_name=command.farm_name,
        )
        repo.add(user)

        logger.info("User registered", user_id=str(user.id), role=user.role)
        return str(user.id)
