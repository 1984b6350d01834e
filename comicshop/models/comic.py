from dataclasses import dataclass
from enum import Enum


class ComicStatus(str, Enum):
    """
    Availability of a comic.

    Values are the shop's words persisted in the inventory file, so
    compare against members, not English strings: `status == "available"`
    is False. Use `label` for the English word.
    """

    AVAILABLE = "disponible"
    SOLD = "vendido"
    RESERVED = "reservado"

    @classmethod
    def parse(cls, text: str) -> "ComicStatus":
        """
        Parse a status word, case-insensitively.

        Accepts the persisted words (disponible, vendido, reservado)
        and their English aliases (available, sold, reserved).

        Raises:
            ValueError: If the word is not a known status
        """
        word = text.strip().lower()
        status = _STATUS_ALIASES.get(word)
        if status is None:
            raise ValueError(f"Unknown comic status: '{text}'")
        return status

    @property
    def is_available(self) -> bool:
        return self is ComicStatus.AVAILABLE

    @property
    def label(self) -> str:
        """English word for the status: available, sold or reserved."""
        return _STATUS_LABELS[self]


_STATUS_ALIASES: dict[str, ComicStatus] = {
    "disponible": ComicStatus.AVAILABLE,
    "available": ComicStatus.AVAILABLE,
    "vendido": ComicStatus.SOLD,
    "sold": ComicStatus.SOLD,
    "reservado": ComicStatus.RESERVED,
    "reserved": ComicStatus.RESERVED,
}

_STATUS_LABELS: dict[ComicStatus, str] = {
    ComicStatus.AVAILABLE: "available",
    ComicStatus.SOLD: "sold",
    ComicStatus.RESERVED: "reserved",
}


def require_text(value: str | None, field_name: str) -> str:
    """Return the trimmed value, or raise ValueError naming the missing field."""
    if value is None or not value.strip():
        raise ValueError(f"Missing required field: {field_name}")
    return value.strip()


@dataclass
class Comic:
    """
    A comic in the shop inventory.

    Attributes:
        title: Title as printed on the cover
        author: Author credited for the issue
        id: Shop identifier, unique in the inventory (case-insensitive)
        status: Current availability

    All text fields are trimmed. Status may be given as a ComicStatus
    or as any word ComicStatus.parse accepts, and is always stored as a
    ComicStatus member (see ComicStatus for comparing it).
    """

    title: str
    author: str
    id: str
    status: ComicStatus = ComicStatus.AVAILABLE

    def __post_init__(self) -> None:
        self.title = require_text(self.title, "title")
        self.author = require_text(self.author, "author")
        self.id = require_text(self.id, "id")
        if self.status is None:
            raise ValueError("Missing required field: status")
        if not isinstance(self.status, ComicStatus):
            self.status = ComicStatus.parse(require_text(self.status, "status"))

    @property
    def key(self) -> str:
        """Case-folded id used for lookups and duplicate checks."""
        return self.id.casefold()

    @property
    def is_available(self) -> bool:
        return self.status.is_available

    def matches_id(self, comic_id: str) -> bool:
        return self.key == comic_id.strip().casefold()

    def __str__(self) -> str:
        return (
            f"\nID: {self.id}\nTÍTULO: {self.title}\nAUTOR: {self.author}"
            f"\nESTADO: {self.status.value}\n"
        )
