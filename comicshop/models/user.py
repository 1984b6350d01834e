from dataclasses import dataclass

from comicshop.models.comic import require_text


def normalize_email(email: str | None) -> str | None:
    """Trim and lower-case an email. Blank emails become None."""
    if email is None or not email.strip():
        return None
    return email.strip().lower()


@dataclass(eq=False)
class User:
    """
    A registered shop customer.

    Users compare equal (and hash) by case-folded id, so "u1" and "U1"
    are the same customer.
    """

    id: str
    name: str
    email: str | None = None

    def __post_init__(self) -> None:
        self.id = require_text(self.id, "id")
        self.name = require_text(self.name, "name")
        self.email = normalize_email(self.email)

    @property
    def key(self) -> str:
        return self.id.casefold()

    def set_email(self, email: str | None) -> None:
        self.email = normalize_email(email)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        return f"ID: '{self.id}', Nombre: '{self.name}', Email: '{self.email or 'N/A'}'"
