from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .client import GoogleDriveClient


class GoogleDriveFolder:
    """Represents a folder in Google Drive."""

    def __init__(
        self,
        client: "GoogleDriveClient",  # using string to avoid circular import
        folder_id: str,
        name: str,
    ):
        """Initialize a Google Drive folder.

        Args:
            client: The GoogleDriveClient instance
            folder_id: The folder's Google Drive ID
            name: The folder's name
        """
        self.client = client
        self.id = folder_id
        self.name = name

    def upload_text(self, name: str, content: str) -> str:
        """Write a Markdown document into this folder, replacing any file with the same name.

        Returns:
            ID of the uploaded file
        """
        return self.client.upload_text(self.id, name, content)

    def __repr__(self) -> str:
        return f"GoogleDriveFolder(id={self.id!r}, name={self.name!r})"
