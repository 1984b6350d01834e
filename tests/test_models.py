import pytest

from comicshop.models.comic import Comic, ComicStatus
from comicshop.models.user import User


class TestComic:
    """Tests for the Comic model."""

    def test_comic_creation(self) -> None:
        """Fields are stored and the status word is parsed."""
        comic = Comic("The Amazing Spider-Man #1", "Stan Lee", "ASM001", "disponible")
        assert comic.title == "The Amazing Spider-Man #1"
        assert comic.author == "Stan Lee"
        assert comic.id == "ASM001"
        assert comic.status == ComicStatus.AVAILABLE

    def test_fields_are_trimmed(self) -> None:
        """Surrounding whitespace is dropped from every field."""
        comic = Comic("  Watchmen ", " Alan Moore", "WM01  ", " vendido ")
        assert comic.title == "Watchmen"
        assert comic.author == "Alan Moore"
        assert comic.id == "WM01"
        assert comic.status == ComicStatus.SOLD

    def test_defaults_to_available(self) -> None:
        """A comic without status is available."""
        comic = Comic(title="Saga #1", author="Brian K. Vaughan", id="SG1")
        assert comic.status == ComicStatus.AVAILABLE
        assert comic.is_available is True

    @pytest.mark.parametrize(
        ("kwargs", "field_name"),
        [
            ({"title": None, "author": "A", "id": "ID123"}, "title"),
            ({"title": "T", "author": None, "id": "ID123"}, "author"),
            ({"title": "T", "author": "A", "id": None}, "id"),
            ({"title": "T", "author": "A", "id": "ID123", "status": None}, "status"),
            ({"title": "   ", "author": "A", "id": "ID123"}, "title"),
            ({"title": "T", "author": "A", "id": "ID123", "status": " "}, "status"),
        ],
    )
    def test_missing_field_is_named(self, kwargs: dict, field_name: str) -> None:
        """A missing or blank field raises ValueError naming it."""
        with pytest.raises(ValueError, match=field_name):
            Comic(**kwargs)

    def test_unknown_status_rejected(self) -> None:
        """A status word outside the known set is rejected."""
        with pytest.raises(ValueError, match="status"):
            Comic("T", "A", "ID123", "lost")

    def test_english_status_stored_as_member(self) -> None:
        """English input is stored as the member, not the English string."""
        comic = Comic("T", "A", "ID123", "available")
        assert comic.status is ComicStatus.AVAILABLE
        assert comic.status != "available"
        assert comic.status.label == "available"

    def test_status_can_change(self) -> None:
        """Status is mutable and drives availability."""
        comic = Comic("T", "A", "ID123")
        comic.status = ComicStatus.SOLD
        assert comic.status == ComicStatus.SOLD
        assert comic.is_available is False

    def test_matches_id_ignores_case(self) -> None:
        """Id matching ignores case and surrounding whitespace."""
        comic = Comic("T", "A", "Asm001")
        assert comic.matches_id("ASM001")
        assert comic.matches_id(" asm001 ")
        assert not comic.matches_id("ASM002")

    def test_str(self) -> None:
        """Rendering matches the shop listing."""
        comic = Comic("The Amazing Spider-Man #1", "Stan Lee", "ASM001", "disponible")
        expected = (
            "\nID: ASM001\nTÍTULO: The Amazing Spider-Man #1\nAUTOR: Stan Lee\nESTADO: disponible\n"
        )
        assert str(comic) == expected


class TestComicStatus:
    """Tests for status parsing and naming."""

    @pytest.mark.parametrize(
        ("word", "status"),
        [
            ("disponible", ComicStatus.AVAILABLE),
            ("Available", ComicStatus.AVAILABLE),
            ("VENDIDO", ComicStatus.SOLD),
            ("sold", ComicStatus.SOLD),
            ("reservado", ComicStatus.RESERVED),
            ("reserved", ComicStatus.RESERVED),
        ],
    )
    def test_parse(self, word: str, status: ComicStatus) -> None:
        """Persisted words and English aliases parse in any case."""
        assert ComicStatus.parse(word) is status

    def test_parse_unknown(self) -> None:
        """An unknown word raises ValueError."""
        with pytest.raises(ValueError):
            ComicStatus.parse("borrowed")

    def test_values_are_persisted_words(self) -> None:
        """Enum values are the words written to the inventory file."""
        assert [s.value for s in ComicStatus] == ["disponible", "vendido", "reservado"]

    def test_labels_are_english(self) -> None:
        """Each status has an English label that parses back to it."""
        assert [s.label for s in ComicStatus] == ["available", "sold", "reserved"]
        for status in ComicStatus:
            assert ComicStatus.parse(status.label) is status


class TestUser:
    """Tests for the User model."""

    def test_user_creation(self) -> None:
        """Fields are trimmed and the email lower-cased."""
        user = User(id=" U1 ", name=" Ana ", email="  Ana@Example.COM ")
        assert user.id == "U1"
        assert user.name == "Ana"
        assert user.email == "ana@example.com"

    @pytest.mark.parametrize("email", [None, "", "   "])
    def test_blank_email_is_none(self, email: str | None) -> None:
        """A blank or missing email is stored as None."""
        user = User(id="U1", name="Ana", email=email)
        assert user.email is None

    def test_missing_id(self) -> None:
        """A user without id is rejected."""
        with pytest.raises(ValueError, match="id"):
            User(id=None, name="Ana")  # type: ignore[arg-type]

    def test_missing_name(self) -> None:
        """A blank name is rejected."""
        with pytest.raises(ValueError, match="name"):
            User(id="U1", name="  ")

    def test_set_email_normalizes(self) -> None:
        """set_email applies the same normalisation as construction."""
        user = User(id="U1", name="Ana")
        user.set_email(" NEW@Mail.com ")
        assert user.email == "new@mail.com"
        user.set_email("")
        assert user.email is None

    def test_equality_ignores_id_case(self) -> None:
        """Users with the same id in any case are equal and hash alike."""
        assert User(id="u1", name="Ana") == User(id="U1", name="Other")
        assert hash(User(id="u1", name="Ana")) == hash(User(id="U1", name="Other"))
        assert User(id="U1", name="Ana") != User(id="U2", name="Ana")
        assert len({User(id="u1", name="A"), User(id="U1", name="B")}) == 1

    def test_str(self) -> None:
        """Rendering shows N/A for a missing email."""
        assert str(User(id="U1", name="Ana", email="a@b.com")) == (
            "ID: 'U1', Nombre: 'Ana', Email: 'a@b.com'"
        )
        assert str(User(id="U2", name="Luis")) == "ID: 'U2', Nombre: 'Luis', Email: 'N/A'"
