"""
Append-only transaction log.

One plain-text line per sale/reservation or return. The log is an audit
trail only: the registries never read it back.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from comicshop.config import LOG_TIMESTAMP_FORMAT
from comicshop.models.comic import Comic
from comicshop.models.user import User

logger = logging.getLogger(__name__)


class TransactionLog:
    """Appends sale and return events to a text file."""

    def __init__(self, path: Path, clock: Callable[[], datetime] = datetime.now):
        self.path = path
        self._clock = clock

    def _timestamp(self) -> str:
        return self._clock().strftime(LOG_TIMESTAMP_FORMAT)

    def _append(self, line: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(line + "\n")
        logger.debug("Appended transaction: %s", line)

    def record_sale(self, comic: Comic, user: User) -> str:
        """
        Append a sale/reservation line.

        Returns:
            The line written (without newline).

        Raises:
            OSError: If the log cannot be written
        """
        line = (
            f"VENTA/RESERVA - Fecha/Hora: {self._timestamp()}, Cómic ID: {comic.id}, "
            f"Título: {comic.title}, Usuario ID: {user.id}, Nombre Usuario: {user.name}"
        )
        self._append(line)
        return line

    def record_return(self, comic: Comic) -> str:
        """
        Append a line for a comic going back to available.

        Returns:
            The line written (without newline).

        Raises:
            OSError: If the log cannot be written
        """
        line = (
            f"DISPONIBLE - Fecha/Hora: {self._timestamp()}, Cómic ID: {comic.id}, "
            f"Título: {comic.title}, Estado anterior: vendido/reservado, "
            f"Estado actual: {comic.status.value}"
        )
        self._append(line)
        return line
