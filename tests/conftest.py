import os

# Must be set before dlxops.firebase is imported anywhere
os.environ["USE_MOCK_DB"] = "1"
os.environ.setdefault("GOOGLE_CLOUD_PROJECT", "test-project")

import pytest

from dlxops.firebase import MockFirestoreClient


@pytest.fixture
def mock_db():
    return MockFirestoreClient()


@pytest.fixture
def seed_docs(mock_db):
    def _seed(collection, docs):
        for doc_id, data in docs.items():
            mock_db.collection(collection).document(doc_id).set(data)
        return mock_db.collection(collection)
    return _seed
