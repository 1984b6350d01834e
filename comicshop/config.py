from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="COMICSHOP_")

    app_name: str = "ComicShop"

    data_dir: Path = Path("data")
    comics_file: str = "comics.csv"
    users_file: str = "usuarios.csv"
    sales_log_file: str = "ventas_log.txt"

    log_level: str = "WARNING"

    @property
    def comics_csv_path(self) -> Path:
        return self.data_dir / self.comics_file

    @property
    def users_csv_path(self) -> Path:
        return self.data_dir / self.users_file

    @property
    def sales_log_path(self) -> Path:
        return self.data_dir / self.sales_log_file


settings = Settings()


# =============================================================================
# FILE FORMATS
# =============================================================================

COMICS_CSV_HEADER = "ID,Titulo,Autor,Estado"
USERS_CSV_HEADER = "ID,Nombre,Email"

# Timestamp format of transaction log lines
LOG_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
