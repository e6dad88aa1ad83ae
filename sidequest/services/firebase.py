"""
Shared Firebase setup for the Firestore-backed stores.

All stores reuse one firebase_admin app (same credentials_path and project_id).
Async reads/writes go through google.cloud.firestore.AsyncClient.
"""

import json
from pathlib import Path
from typing import Optional, Union

import firebase_admin
from firebase_admin import credentials, firestore
from google.cloud.firestore import AsyncClient
from google.oauth2 import service_account


def project_id_from_credentials_file(credentials_path: Union[Path, str]) -> Optional[str]:
    """Read project_id from a Google service account JSON file if present."""
    try:
        path = Path(credentials_path)
        if not path.is_file():
            return None
        with open(path) as f:
            data = json.load(f)
        return data.get("project_id") or data.get("projectId")
    except (OSError, json.JSONDecodeError):
        return None


def firestore_client(
    project_id: Optional[str] = None,
    credentials_path: Optional[Union[Path, str]] = None,
):
    """Initialize the default firebase_admin app once and return its Firestore client."""
    if not firebase_admin._apps:
        if credentials_path:
            cred = credentials.Certificate(str(Path(credentials_path).resolve()))
            opts = {"projectId": project_id} if project_id else None
            firebase_admin.initialize_app(cred, opts)
        else:
            firebase_admin.initialize_app(options={"projectId": project_id} if project_id else None)
    return firestore.client()


def async_firestore_client(
    project_id: Optional[str] = None,
    credentials_path: Optional[Union[Path, str]] = None,
) -> AsyncClient:
    """AsyncClient bound to the same service account."""
    if not credentials_path:
        raise ValueError("Async Firestore access requires credentials_path")
    resolved = str(Path(credentials_path).resolve())
    creds = service_account.Credentials.from_service_account_file(resolved)
    proj = project_id or project_id_from_credentials_file(resolved)
    return AsyncClient(project=proj, credentials=creds)


DESCENDING = firestore.Query.DESCENDING
