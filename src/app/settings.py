import os
import pathlib
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


class ConfigError(RuntimeError):
    """Required configuration is missing."""


class Settings(BaseModel):
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")

    notion_token: str = os.getenv("NOTION_TOKEN", "")
    notion_database_id: str = os.getenv("NOTION_DB_ID", "")

    drive_root_folder_id: Optional[str] = os.getenv("GDRIVE_ROOT_FOLDER_ID", "").strip() or None
    drive_folder: str = os.getenv("GDRIVE_FOLDER", "Meeting Notes")
    google_token_path: pathlib.Path = pathlib.Path(
        os.getenv("GOOGLE_TOKEN_PATH", ".secrets/google_token.json")
    )

    upload_delay_s: float = float(os.getenv("UPLOAD_DELAY_SECS", "0.1"))
    # Render child pages as inline "##" sections (meeting-notes style databases)
    expand_child_pages: bool = os.getenv("EXPAND_CHILD_PAGES", "0") == "1"

    def require_sync_config(self) -> None:
        """Raise ConfigError naming every missing value the sync needs."""
        missing = []
        if not self.notion_token:
            missing.append("NOTION_TOKEN")
        if not self.notion_database_id:
            missing.append("NOTION_DB_ID")
        if not self.google_token_path.exists():
            missing.append(f"Google token at {self.google_token_path}")
        if missing:
            raise ConfigError(f"missing configuration: {', '.join(missing)}")


settings = Settings()
