# backend/mathnotes/config.py
from typing import List, Literal
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Storage Paths
    STORAGE_PATH: Path = Path("storage")
    PAGES_PATH: Path | None = None  # Will be set based on STORAGE_PATH
    LOGS_PATH: Path | None = None  # Will be set based on STORAGE_PATH

    # Blob backend: "filesystem" writes into PAGES_PATH, "database" into DATABASE_URL
    STORAGE_BACKEND: Literal["filesystem", "database"] = "filesystem"
    DATABASE_URL: str = "sqlite:///./mathnotes.db"

    # Persistence
    INDEX_KEY: str = "folders.json"
    SAVE_DEBOUNCE_SECONDS: float = 0.5
    DEFAULT_COLLECTIONS: List[str] = ["Math", "Physics"]

    # Recognition
    RECOGNITION_URL: str = "http://localhost:8080/recognize"
    RECOGNITION_TIMEOUT: float = 30.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    def model_post_init(self, __context) -> None:
        """Post initialization hook to set derived paths"""
        if isinstance(self.STORAGE_PATH, str):
            self.STORAGE_PATH = Path(self.STORAGE_PATH)

        self.PAGES_PATH = Path(self.PAGES_PATH) if self.PAGES_PATH else self.STORAGE_PATH / "pages"
        self.LOGS_PATH = Path(self.LOGS_PATH) if self.LOGS_PATH else self.STORAGE_PATH / "logs"

        self.create_storage_dirs()

    def create_storage_dirs(self) -> None:
        """Create necessary storage directories if they don't exist"""
        for path in [self.STORAGE_PATH, self.PAGES_PATH, self.LOGS_PATH]:
            path.mkdir(parents=True, exist_ok=True)

settings = Settings()
