import json
import logging
import os
from typing import Optional

logger = logging.getLogger("dlxops.settings")

# Firestore rejects write batches larger than this
FIRESTORE_MAX_BATCH = 500

PROJECT_ID: Optional[str] = os.environ.get("GOOGLE_CLOUD_PROJECT") or os.environ.get("GCP_PROJECT")
USE_MOCK_DB: bool = os.environ.get("USE_MOCK_DB", "0") == "1"
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")


def batch_size() -> int:
    try:
        size = int(os.environ.get("FIRESTORE_BATCH_SIZE", str(FIRESTORE_MAX_BATCH)))
    except ValueError:
        logger.warning("Invalid FIRESTORE_BATCH_SIZE, using %s", FIRESTORE_MAX_BATCH)
        return FIRESTORE_MAX_BATCH
    return max(1, min(size, FIRESTORE_MAX_BATCH))


def project_root() -> str:
    return os.environ.get("PROJECT_ROOT") or os.getcwd()


def service_account_info() -> Optional[dict]:
    """
    Parse FIREBASE_SERVICE_ACCOUNT_KEY (a JSON string).
    Returns None when unset or unusable so callers fall back to ADC.
    """
    raw = os.environ.get("FIREBASE_SERVICE_ACCOUNT_KEY")
    if not raw:
        return None
    try:
        info = json.loads(raw)
    except ValueError as e:
        logger.warning("FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON: %s", e)
        return None
    if not isinstance(info, dict) or not isinstance(info.get("project_id"), str):
        return None
    key = info.get("private_key")
    if isinstance(key, str) and "\\n" in key:
        info["private_key"] = key.replace("\\n", "\n")
    return info
