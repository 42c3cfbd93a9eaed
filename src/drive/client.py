import io
import os
import pathlib
from typing import Any, Optional

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaIoBaseUpload
from loguru import logger

from .folder import GoogleDriveFolder

FOLDER_MIME = "application/vnd.google-apps.folder"


class GoogleDriveClient:
    """Client for interacting with Google Drive API.

    Handles authentication and provides the folder and upload operations the sync needs.
    """

    SCOPES = ["https://www.googleapis.com/auth/drive"]
    TOKEN_PATH = pathlib.Path(".secrets/google_token.json")

    def __init__(
        self,
        root_folder_id: Optional[str] = None,
        token_path: Optional[pathlib.Path] = None,
        service: Any = None,
    ):
        """Initialize the Google Drive client.

        Args:
            root_folder_id: Optional ID of a root folder to use as the default parent.
                          If not provided, will use GDRIVE_ROOT_FOLDER_ID from environment.
            token_path: Path of the OAuth token written by scripts/google_auth.py.
            service: Prebuilt Drive service; built lazily from the token when omitted.
        """
        self.root_folder_id = (
            root_folder_id or os.getenv("GDRIVE_ROOT_FOLDER_ID", "").strip() or None
        )
        self.token_path = token_path or self.TOKEN_PATH
        self._service = service

    @property
    def service(self) -> Any:
        """Get or create the Drive API service."""
        if self._service is None:
            self._service = build("drive", "v3", credentials=self._load_credentials())
        return self._service

    def _load_credentials(self) -> Credentials:
        """Load and refresh Google credentials from the token file.

        Returns:
            Valid Google credentials object.

        Raises:
            RuntimeError: If token file is missing.
        """
        if not self.token_path.exists():
            raise RuntimeError("Google token missing. Run: python scripts/google_auth.py")

        creds = Credentials.from_authorized_user_file(str(self.token_path), self.SCOPES)
        if creds and creds.expired and creds.refresh_token:
            creds.refresh(Request())
            self.token_path.write_text(creds.to_json())
        return creds

    def create_folder(self, name: str, parent_id: Optional[str] = None) -> GoogleDriveFolder:
        """Create a new folder in Google Drive.

        Args:
            name: Name of the folder to create
            parent_id: ID of the parent folder. If not provided, uses the client's root_folder_id

        Returns:
            GoogleDriveFolder object representing the created folder

        Raises:
            HttpError: If the API request fails
        """
        parent = parent_id or self.root_folder_id
        body = {"name": name, "mimeType": FOLDER_MIME}
        if parent:
            body["parents"] = [parent]  # type: ignore[assignment]

        try:
            meta = self.service.files().create(body=body, fields="id, name").execute()
            logger.info(f"[drive] created folder {name!r} ({meta['id']})")
            return GoogleDriveFolder(self, folder_id=meta["id"], name=meta["name"])

        except HttpError as e:
            logger.exception(f"Drive API error: {e}")
            raise

    def search(
        self,
        name: str,
        parent_id: Optional[str] = None,
        folders_only: bool = True,
        limit: Optional[int] = None,
    ) -> list[dict]:
        """Search for non-trashed items with an exact name directly inside a folder.

        Args:
            name: The exact name to match
            parent_id: ID of the parent folder to search in. If not provided, uses root_folder_id
            folders_only: If True, only returns folders; otherwise only returns files
            limit: Maximum number of results to return. If None, returns all matches

        Returns:
            List of file resources with id and name. Empty list if nothing found.
        """
        escaped = name.replace("\\", "\\\\").replace("'", "\\'")
        query_parts = ["trashed = false"]

        if folders_only:
            query_parts.append(f"mimeType = '{FOLDER_MIME}'")
        else:
            query_parts.append(f"mimeType != '{FOLDER_MIME}'")

        query_parts.append(f"name = '{escaped}'")

        search_parent = parent_id or self.root_folder_id or "root"
        query_parts.append(f"'{search_parent}' in parents")

        try:
            results = (
                self.service.files()
                .list(
                    q=" and ".join(query_parts),
                    spaces="drive",
                    fields="files(id, name)",
                    pageSize=limit,
                )
                .execute()
            )
            return results.get("files", [])

        except HttpError as e:
            logger.exception(f"Drive API error: {e}")
            raise

    def find_folder(self, name: str, parent_id: Optional[str] = None) -> Optional[GoogleDriveFolder]:
        """Find a single folder by exact name match. Convenience wrapper around search().

        Returns:
            GoogleDriveFolder if found, None otherwise
        """
        results = self.search(name, parent_id=parent_id, folders_only=True, limit=1)
        if not results:
            return None
        return GoogleDriveFolder(self, folder_id=results[0]["id"], name=results[0]["name"])

    def find_file(self, name: str, parent_id: str) -> Optional[str]:
        """Return the ID of a file with exactly this name in a folder, if any."""
        results = self.search(name, parent_id=parent_id, folders_only=False, limit=1)
        return results[0]["id"] if results else None

    def ensure_folder(self, path: str) -> GoogleDriveFolder:
        """Return the folder at a slash-separated path under the root, creating missing parts.

        Existing folders are reused, so calling this repeatedly is safe.
        """
        parts = [p for p in path.split("/") if p.strip()]
        if not parts:
            raise ValueError(f"Empty Drive folder path: {path!r}")

        parent_id: Optional[str] = None
        for part in parts:
            folder = self.find_folder(part, parent_id=parent_id) or self.create_folder(
                part, parent_id=parent_id
            )
            parent_id = folder.id
        return folder

    def upload_text(
        self, parent_id: str, name: str, content: str, mime_type: str = "text/markdown"
    ) -> str:
        """Write a text file into a folder, overwriting a same-named file.

        Returns:
            ID of the created or updated file
        """
        media = MediaIoBaseUpload(
            io.BytesIO(content.encode("utf-8")), mimetype=mime_type, resumable=False
        )
        try:
            existing_id = self.find_file(name, parent_id)
            if existing_id:
                self.service.files().update(
                    fileId=existing_id, media_body=media, fields="id"
                ).execute()
                logger.info(f"[drive] updated {name!r} ({existing_id})")
                return existing_id

            body = {"name": name, "parents": [parent_id], "mimeType": mime_type}
            created = self.service.files().create(body=body, media_body=media, fields="id").execute()
            logger.info(f"[drive] uploaded {name!r} ({created['id']})")
            return created["id"]

        except HttpError as e:
            logger.exception(f"Drive API error: {e}")
            raise
