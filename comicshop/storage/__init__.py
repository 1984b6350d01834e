from comicshop.storage.csv_store import join_fields, read_csv, write_csv
from comicshop.storage.transaction_log import TransactionLog

__all__ = [
    "TransactionLog",
    "join_fields",
    "read_csv",
    "write_csv",
]
