"""Public display fields of an account, embedded in product and order reads."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from agrigo.identity.user import User


def _lookup(user_id) -> User | None:
    try:
        return current_domain.repository_for(User).get(user_id)
    except ObjectNotFoundError:
        return None


def _card(user: User) -> dict:
    return {"id": str(user.id), "name": user.name, "email": user.email, "phone": user.phone}


def consumer_card(user_id) -> dict | None:
    user = _lookup(user_id)
    return _card(user) if user else None


def farmer_card(user_id) -> dict | None:
    user = _lookup(user_id)
    if user is None:
        return None
    return {**_card(user), "farm_name": user.farm_name}
