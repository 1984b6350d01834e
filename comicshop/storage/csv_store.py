"""
Line-based CSV reader and writer.

The inventory files are plain comma-joined lines with a header row.
There is no quoting or escaping: a field containing a comma splits into
two fields on the next read.
"""

from collections.abc import Callable, Iterable
from pathlib import Path
from typing import TypeVar

T = TypeVar("T")

DELIMITER = ","


def read_csv(path: Path, row_mapper: Callable[[list[str]], T | None]) -> list[T]:
    """
    Read records from a CSV file.

    The first line is treated as a header and skipped unconditionally.
    Blank lines are skipped. Every other line is split on commas and
    passed to `row_mapper`; rows for which it returns None are dropped.

    Args:
        path: File to read
        row_mapper: Converts a list of raw fields into a record, or None to skip

    Returns:
        Mapped records in file order.

    Raises:
        OSError: If the file cannot be opened or read
    """
    records: list[T] = []

    with open(path, encoding="utf-8") as f:
        next(f, None)  # header

        for line in f:
            line = line.rstrip("\r\n")
            if not line.strip():
                continue

            record = row_mapper(line.split(DELIMITER))
            if record is not None:
                records.append(record)

    return records


def write_csv(
    path: Path,
    records: Iterable[T],
    record_mapper: Callable[[T], str],
    header: str | None = None,
) -> None:
    """
    Overwrite a CSV file with a header and one line per record.

    Args:
        path: File to write (truncated if it exists)
        records: Records to write, in order
        record_mapper: Converts a record into one comma-joined line
        header: Header line, omitted when None or blank

    Raises:
        OSError: If the file cannot be written
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8", newline="") as f:
        if header and header.strip():
            f.write(header + "\n")
        for record in records:
            f.write(record_mapper(record) + "\n")


def join_fields(*fields: str) -> str:
    """Join fields into one CSV line."""
    return DELIMITER.join(fields)
