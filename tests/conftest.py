from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import pytest

from comicshop.models.comic import Comic, ComicStatus
from comicshop.models.user import User
from comicshop.services.registry import ComicRegistry

FIXED_NOW = datetime(2024, 5, 17, 14, 30, 5)


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Clock that always returns the same instant, for deterministic log lines."""
    return lambda: FIXED_NOW


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "data"


@pytest.fixture
def registry(data_dir: Path, fixed_clock: Callable[[], datetime]) -> ComicRegistry:
    """Empty registry writing into a temporary data directory."""
    registry = ComicRegistry(
        comics_path=data_dir / "comics.csv",
        users_path=data_dir / "usuarios.csv",
        sales_log_path=data_dir / "ventas_log.txt",
        clock=fixed_clock,
    )
    registry.load()
    return registry


@pytest.fixture
def spider_man() -> Comic:
    return Comic("The Amazing Spider-Man #1", "Stan Lee", "ASM001", ComicStatus.AVAILABLE)


@pytest.fixture
def ana() -> User:
    return User(id="U1", name="Ana", email="Ana@Example.com")


@pytest.fixture
def stocked_registry(registry: ComicRegistry, spider_man: Comic, ana: User) -> ComicRegistry:
    """Registry with one available comic and one user."""
    registry.add_comic(spider_man)
    registry.add_user(ana)
    return registry
