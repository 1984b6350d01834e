"""
Comic inventory and customer registry.

Owns the in-memory collections, enforces uniqueness (comic id, user id,
user email), runs the sale/return state transitions, and rewrites the
corresponding CSV file after every successful mutation.

INVARIANT: Ids are compared case-folded and persisted as entered.
INVARIANT: A failed write never rolls back the in-memory change. The
caller is told through OperationResult.warnings.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

from comicshop.config import COMICS_CSV_HEADER, USERS_CSV_HEADER, Settings
from comicshop.models.comic import Comic, ComicStatus
from comicshop.models.failure import (
    ComicNotFoundError,
    ComicUnavailableError,
    DuplicateKeyError,
    FailureDetail,
    FailureKind,
    KnownError,
    OperationResult,
    RefusalError,
    UserNotFoundError,
    io_failure,
)
from comicshop.models.user import User, normalize_email
from comicshop.storage.csv_store import join_fields, read_csv, write_csv
from comicshop.storage.transaction_log import TransactionLog

logger = logging.getLogger(__name__)

COMIC_FIELD_COUNT = 4
USER_MIN_FIELD_COUNT = 2


def comic_to_line(comic: Comic) -> str:
    return join_fields(comic.id, comic.title, comic.author, comic.status.value)


def user_to_line(user: User) -> str:
    return join_fields(user.id, user.name, user.email or "")


def comic_from_fields(fields: list[str]) -> Comic | None:
    """Build a Comic from an inventory row (ID,Titulo,Autor,Estado), or None if malformed."""
    if len(fields) < COMIC_FIELD_COUNT:
        logger.warning("Skipping inventory row with %d fields: %s", len(fields), fields)
        return None

    comic_id, title, author, status = fields[:COMIC_FIELD_COUNT]
    try:
        return Comic(title=title, author=author, id=comic_id, status=status)
    except ValueError as e:
        logger.warning("Skipping invalid inventory row %s: %s", fields, e)
        return None


def user_from_fields(fields: list[str]) -> User | None:
    """Build a User from a registry row (ID,Nombre[,Email]), or None if malformed."""
    if len(fields) < USER_MIN_FIELD_COUNT:
        logger.warning("Skipping user row with %d fields: %s", len(fields), fields)
        return None

    email = fields[2] if len(fields) > 2 else None
    try:
        return User(id=fields[0], name=fields[1], email=email)
    except ValueError as e:
        logger.warning("Skipping invalid user row %s: %s", fields, e)
        return None


class ComicRegistry:
    """
    In-memory comic inventory and user registry with CSV mirrors.

    Comics keep insertion order for listing. Users are keyed by
    case-folded id. Both have a companion set for O(1) duplicate checks.
    """

    def __init__(
        self,
        comics_path: Path,
        users_path: Path,
        sales_log_path: Path,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.comics_path = comics_path
        self.users_path = users_path
        self.transaction_log = TransactionLog(sales_log_path, clock=clock)

        self._comics: list[Comic] = []
        self._comic_ids: set[str] = set()
        self._users: dict[str, User] = {}
        self._emails: set[str] = set()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        clock: Callable[[], datetime] = datetime.now,
    ) -> "ComicRegistry":
        """Create a registry for the configured data files and load them."""
        registry = cls(
            comics_path=settings.comics_csv_path,
            users_path=settings.users_csv_path,
            sales_log_path=settings.sales_log_path,
            clock=clock,
        )
        registry.load()
        return registry

    # --- Loading ---

    def load(self) -> None:
        """Replace both registries with the contents of their CSV files."""
        self.load_comics()
        self.load_users()

    def load_comics(self) -> int:
        """
        Load the inventory file.

        A missing or unreadable file leaves the inventory empty.
        Rows with a duplicate id keep the first occurrence.

        Returns:
            Number of comics loaded.
        """
        self._comics.clear()
        self._comic_ids.clear()

        try:
            loaded = read_csv(self.comics_path, comic_from_fields)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(
                "Could not load comic inventory from %s, starting empty: %s",
                self.comics_path,
                e,
            )
            return 0

        for comic in loaded:
            if comic.key in self._comic_ids:
                logger.warning("Skipping duplicate comic id in %s: %s", self.comics_path, comic.id)
                continue
            self._comics.append(comic)
            self._comic_ids.add(comic.key)

        logger.info("Loaded %d comics from %s", len(self._comics), self.comics_path)
        return len(self._comics)

    def load_users(self) -> int:
        """
        Load the user file.

        A missing or unreadable file leaves the registry empty.
        Rows reusing a registered id or email are skipped.

        Returns:
            Number of users loaded.
        """
        self._users.clear()
        self._emails.clear()

        try:
            loaded = read_csv(self.users_path, user_from_fields)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(
                "Could not load users from %s, starting empty: %s",
                self.users_path,
                e,
            )
            return 0

        for user in loaded:
            if user.key in self._users:
                logger.warning("Skipping duplicate user id in %s: %s", self.users_path, user.id)
                continue
            if user.email and user.email in self._emails:
                logger.warning("Skipping duplicate email in %s: %s", self.users_path, user.email)
                continue
            self._users[user.key] = user
            if user.email:
                self._emails.add(user.email)

        logger.info("Loaded %d users from %s", len(self._users), self.users_path)
        return len(self._users)

    # --- Persistence ---

    def save_comics(self) -> FailureDetail | None:
        """
        Rewrite the inventory file.

        Returns:
            None on success, or an IO_FAILURE detail describing the failure.
        """
        try:
            write_csv(self.comics_path, self._comics, comic_to_line, COMICS_CSV_HEADER)
        except OSError as e:
            logger.error("Failed to save comic inventory to %s: %s", self.comics_path, e)
            return io_failure("Could not save the comic inventory.", e)
        return None

    def save_users(self) -> FailureDetail | None:
        """
        Rewrite the user file, ordered by id.

        Returns:
            None on success, or an IO_FAILURE detail describing the failure.
        """
        try:
            write_csv(self.users_path, self.list_users(), user_to_line, USERS_CSV_HEADER)
        except OSError as e:
            logger.error("Failed to save users to %s: %s", self.users_path, e)
            return io_failure("Could not save users.", e)
        return None

    @staticmethod
    def _with_warnings(
        result: OperationResult[Any], *warnings: FailureDetail | None
    ) -> OperationResult[Any]:
        result.warnings.extend(w for w in warnings if w)
        return result

    # --- Comics ---

    def __len__(self) -> int:
        return len(self._comics)

    def add_comic(self, comic: Comic) -> OperationResult[Comic]:
        """
        Add a comic to the inventory.

        A comic whose id is already registered (case-insensitive) is
        refused and the inventory is left untouched.
        """
        if comic.key in self._comic_ids:
            logger.warning("Comic id already registered: %s", comic.id)
            return DuplicateKeyError("comic ID", comic.id).to_result()

        self._comics.append(comic)
        self._comic_ids.add(comic.key)
        logger.info("Added comic %s (%s)", comic.id, comic.title)

        result = OperationResult.success(
            comic, message=f"Comic '{comic.title}' (ID: {comic.id}) added to the inventory."
        )
        return self._with_warnings(result, self.save_comics())

    def remove_comic(self, comic_id: str) -> OperationResult[Comic]:
        """
        Remove an available comic from the inventory.

        Fails with NOT_FOUND when no comic has that id and with
        ALREADY_UNAVAILABLE when it is sold or reserved. The removed
        comic is returned on success.
        """
        try:
            comic = self._require_comic(comic_id)
            if not comic.is_available:
                raise KnownError(
                    kind=FailureKind.ALREADY_UNAVAILABLE,
                    message=(
                        f"The comic '{comic.title}' (ID: {comic.id}) cannot be removed "
                        f"because it is {comic.status.label}."
                    ),
                    suggestion="Mark it as available first if it was returned.",
                )
        except KnownError as e:
            logger.info("Comic not removed: %s", e.message)
            return e.to_result()

        self._comics.remove(comic)
        self._comic_ids.discard(comic.key)
        logger.info("Removed comic %s (%s)", comic.id, comic.title)

        result = OperationResult.success(
            comic, message=f"Comic '{comic.title}' (ID: {comic.id}) removed from the inventory."
        )
        return self._with_warnings(result, self.save_comics())

    def find_comic_by_id(self, comic_id: str) -> Comic | None:
        """Linear, case-insensitive search by id."""
        for comic in self._comics:
            if comic.matches_id(comic_id):
                return comic
        return None

    def list_comics(self) -> list[Comic]:
        """All comics in insertion order."""
        return list(self._comics)

    def _require_comic(self, comic_id: str) -> Comic:
        comic = self.find_comic_by_id(comic_id)
        if comic is None:
            raise ComicNotFoundError(comic_id)
        return comic

    def _require_user(self, user_id: str, kind: FailureKind = FailureKind.INVALID_INPUT) -> User:
        user = self.find_user_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id, kind=kind)
        return user

    def sell(self, comic_id: str, user_id: str, reserve: bool = False) -> OperationResult[Comic]:
        """
        Sell or reserve an available comic to a registered user.

        Fails with NOT_FOUND when the comic is missing, ALREADY_UNAVAILABLE
        when it is sold or reserved, and INVALID_INPUT when the user is
        not registered. On success the inventory is saved and a line is
        appended to the transaction log.
        """
        try:
            comic = self._require_comic(comic_id)
            if not comic.is_available:
                raise ComicUnavailableError(comic.id, comic.title, comic.status.value)
            user = self._require_user(user_id)
        except KnownError as e:
            logger.info("Sale rejected: %s", e.message)
            return e.to_result()

        comic.status = ComicStatus.RESERVED if reserve else ComicStatus.SOLD
        save_warning = self.save_comics()
        log_warning = self._record(self.transaction_log.record_sale, comic, user)

        logger.info("Comic %s %s to user %s", comic.id, comic.status.value, user.id)
        result = OperationResult.success(
            comic,
            message=(
                f"Sale/reservation recorded: '{comic.title}' (ID: {comic.id}) "
                f"to {user.name} (ID: {user.id})."
            ),
        )
        return self._with_warnings(result, save_warning, log_warning)

    def mark_available(self, comic_id: str) -> OperationResult[Comic]:
        """
        Return a sold or reserved comic to the available stock.

        Fails with NOT_FOUND when the comic is missing. A comic that is
        already available is left alone (success, changed=False).
        """
        try:
            comic = self._require_comic(comic_id)
        except KnownError as e:
            logger.info("Return rejected: %s", e.message)
            return e.to_result()

        if comic.is_available:
            return OperationResult.success(
                comic,
                message=f"The comic '{comic.title}' (ID: {comic.id}) is already available.",
                changed=False,
            )

        comic.status = ComicStatus.AVAILABLE
        save_warning = self.save_comics()
        log_warning = self._record(self.transaction_log.record_return, comic)

        logger.info("Comic %s is available again", comic.id)
        result = OperationResult.success(
            comic, message=f"Comic '{comic.title}' (ID: {comic.id}) is now available."
        )
        return self._with_warnings(result, save_warning, log_warning)

    @staticmethod
    def _record(writer: Callable[..., str], *args: Any) -> FailureDetail | None:
        try:
            writer(*args)
        except OSError as e:
            logger.error("Failed to write transaction log: %s", e)
            return io_failure("Could not write the transaction log.", e)
        return None

    # --- Users ---

    def add_user(self, user: User) -> OperationResult[User]:
        """
        Register a user.

        Refused when the id (case-insensitive) or the email is already
        registered.
        """
        try:
            if user.key in self._users:
                raise DuplicateKeyError("user ID", user.id)
            if user.email and user.email in self._emails:
                raise DuplicateKeyError("email", user.email)
        except RefusalError as e:
            logger.warning("User not added: %s", e.message)
            return e.to_result()

        self._users[user.key] = user
        if user.email:
            self._emails.add(user.email)
        logger.info("Added user %s (%s)", user.id, user.name)

        result = OperationResult.success(user, message=f"User '{user.name}' (ID: {user.id}) added.")
        return self._with_warnings(result, self.save_users())

    def remove_user(self, user_id: str) -> OperationResult[User]:
        """
        Remove a user and free their email.

        Users with sold or reserved comics may be removed; the
        transaction log keeps the sale history. Fails with NOT_FOUND
        when the id is not registered.
        """
        user = self._users.pop(user_id.strip().casefold(), None)
        if user is None:
            logger.info("User to remove not found: %s", user_id)
            return UserNotFoundError(user_id, kind=FailureKind.NOT_FOUND).to_result()

        if user.email:
            self._emails.discard(user.email)
        logger.info("Removed user %s (%s)", user.id, user.name)

        result = OperationResult.success(user, message=f"User '{user.name}' (ID: {user.id}) removed.")
        return self._with_warnings(result, self.save_users())

    def change_user_email(self, user_id: str, email: str | None) -> OperationResult[User]:
        """
        Replace a user's email, keeping emails unique.

        A blank email clears it.
        """
        new_email = normalize_email(email)
        try:
            user = self._require_user(user_id, kind=FailureKind.NOT_FOUND)
            if new_email and new_email != user.email and new_email in self._emails:
                raise DuplicateKeyError("email", new_email)
        except (KnownError, RefusalError) as e:
            logger.info("Email not changed: %s", e.message)
            return e.to_result()

        if new_email == user.email:
            return OperationResult.success(user, changed=False)

        if user.email:
            self._emails.discard(user.email)
        user.set_email(new_email)
        if user.email:
            self._emails.add(user.email)
        logger.info("Changed email of user %s", user.id)

        result = OperationResult.success(user, message=f"Email of user '{user.name}' updated.")
        return self._with_warnings(result, self.save_users())

    def find_user_by_id(self, user_id: str) -> User | None:
        return self._users.get(user_id.strip().casefold())

    def list_users(self) -> list[User]:
        """Users ordered by id."""
        return sorted(self._users.values(), key=lambda u: u.id)

    def list_users_by_name(self) -> list[User]:
        """Users ordered by name. Users sharing a name keep registration order."""
        return sorted(self._users.values(), key=lambda u: u.name)

    @property
    def user_count(self) -> int:
        return len(self._users)
