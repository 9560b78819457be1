# core/storage_service.py
import logging
import time
from functools import lru_cache

from google.cloud import storage
from google.oauth2 import service_account

from greatwok.core import config

logger = logging.getLogger(__name__)

TOKEN_URI = "https://oauth2.googleapis.com/token"
PUBLIC_URL_BASE = "https://storage.googleapis.com"


def public_url(bucket_name: str, object_name: str) -> str:
    return f"{PUBLIC_URL_BASE}/{bucket_name}/{object_name}"


def object_name_for(filename: str, now_ms: int = None) -> str:
    """Uploaded objects are keyed ``<epoch ms>_<original name>``."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{now_ms}_{filename}"


class GCSUploader:
    """Pushes dish images into a Google Cloud Storage bucket."""

    def __init__(self, bucket_name, project_id=None, client_email=None, private_key=None):
        self.bucket_name = bucket_name
        self.project_id = project_id
        self.client_email = client_email
        self.private_key = private_key
        self._client = None

    def _get_client(self):
        if self._client is None:
            credentials = None
            if self.client_email and self.private_key:
                credentials = service_account.Credentials.from_service_account_info({
                    "type": "service_account",
                    "project_id": self.project_id,
                    "client_email": self.client_email,
                    "private_key": self.private_key,
                    "token_uri": TOKEN_URI,
                })
            # without explicit credentials the library falls back to application default credentials
            self._client = storage.Client(project=self.project_id, credentials=credentials)
        return self._client

    def upload(self, filename: str, data: bytes, content_type: str = None) -> str:
        """Store ``data`` and return its public URL."""
        if not self.bucket_name:
            raise RuntimeError("GCS_BUCKET_NAME is not configured")
        name = object_name_for(filename)
        blob = self._get_client().bucket(self.bucket_name).blob(name)
        blob.upload_from_string(data, content_type=content_type or "application/octet-stream")
        logger.info("Uploaded %s (%s bytes) to bucket %s", name, len(data), self.bucket_name)
        return public_url(self.bucket_name, name)


@lru_cache(maxsize=1)
def get_uploader() -> GCSUploader:
    """FastAPI dependency; tests override it with an in-memory fake."""
    return GCSUploader(
        bucket_name=config.GCS_BUCKET_NAME,
        project_id=config.GCS_PROJECT_ID,
        client_email=config.GCS_CLIENT_EMAIL,
        private_key=config.GCS_PRIVATE_KEY,
    )
