"""User aggregate: a farmer or consumer account."""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from agrigo.domain import agrigo
from agrigo.identity.events import UserRegistered


class UserRole(Enum):
    FARMER = "farmer"
    CONSUMER = "consumer"


@agrigo.aggregate
class User:
    name: String(required=True, max_length=150)
    email: String(required=True, max_length=254)
    phone: String(required=True, max_length=20)
    password_hash: String(required=True, max_length=255)
    role: String(choices=UserRole, default=UserRole.CONSUMER.value)
    farm_name: String(max_length=200)
    created_at: DateTime()

    @invariant.post
    def email_must_look_like_an_address(self):
        local, _, domain = (self.email or "").partition("@")
        if not local or "." not in domain or " " in self.email:
            raise ValidationError({"email": [f"Invalid email address: {self.email!r}"]})

    @classmethod
    def register(cls, name, email, phone, password_hash, role=None, farm_name=None):
        now = datetime.now(UTC)
        user = cls(
            name=name,
            email=email.strip().lower(),
            phone=phone,
            password_hash=password_hash,
            role=role or UserRole.CONSUMER.value,
            farm_name=farm_name,
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
    def is_farmer(self) -> bool:
        return self.role == UserRole.FARMER.value
