"""One-time OAuth consent for the Drive account the sync uploads into."""

import os
import pathlib

from dotenv import load_dotenv
from google_auth_oauthlib.flow import InstalledAppFlow
from loguru import logger

load_dotenv()

SCOPES = ["https://www.googleapis.com/auth/drive"]  # full drive; needed to overwrite files
CLIENT = pathlib.Path(os.getenv("GOOGLE_CLIENT_SECRET_PATH", ".secrets/google_drive_secret.json"))
TOKEN = pathlib.Path(os.getenv("GOOGLE_TOKEN_PATH", ".secrets/google_token.json"))


def main():
    if not CLIENT.exists():
        raise SystemExit(f"Missing {CLIENT}")
    TOKEN.parent.mkdir(parents=True, exist_ok=True)
    flow = InstalledAppFlow.from_client_secrets_file(str(CLIENT), SCOPES)
    # opens a browser, runs a tiny local server for the callback
    creds = flow.run_local_server(port=8765, prompt="consent")
    TOKEN.write_text(creds.to_json())
    logger.info(f"Wrote token: {TOKEN}")


if __name__ == "__main__":
    main()
