"""
ComicShop services.

Business logic for the comic inventory and customer registry.
"""

from comicshop.services.registry import (
    ComicRegistry,
    comic_from_fields,
    comic_to_line,
    user_from_fields,
    user_to_line,
)

__all__ = [
    "ComicRegistry",
    "comic_from_fields",
    "comic_to_line",
    "user_from_fields",
    "user_to_line",
]
