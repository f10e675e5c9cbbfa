from agrigo.domain import agrigo
from agrigo.identity.user import User


@agrigo.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email) -> User | None:
        """Return the account registered under ``email``, or None."""
        matches = self._dao.query.filter(email=email.strip().lower()).all().items
        return matches[0] if matches else None
