import logging
import uuid

import firebase_admin
from firebase_admin import credentials
from google.cloud import firestore

from dlxops import settings

logger = logging.getLogger("dlxops.firebase")


class MockDocumentReference:
    def __init__(self, collection, id):
        self._parent = collection
        self.id = id or uuid.uuid4().hex[:20]

    @property
    def exists(self):
        return self.id in self._parent._docs

    @property
    def reference(self):
        return self

    def get(self):
        return self

    def to_dict(self):
        data = self._parent._docs.get(self.id)
        return dict(data) if data is not None else None

    def set(self, data, merge=False):
        if merge and self.exists:
            self._parent._docs[self.id].update(data)
        else:
            self._parent._docs[self.id] = dict(data)
        logger.debug("[MockDB] Set %s: %s", self.id, data)

    def update(self, data):
        if not self.exists:
            raise KeyError(f"No document to update: {self.id}")
        self._parent._docs[self.id].update(data)
        logger.debug("[MockDB] Update %s: %s", self.id, data)

    def delete(self):
        self._parent._docs.pop(self.id, None)
        logger.debug("[MockDB] Delete %s", self.id)

    def collection(self, name):
        key = (self.id, name)
        if key not in self._parent._subcollections:
            self._parent._subcollections[key] = MockCollectionReference()
        return self._parent._subcollections[key]


class MockCollectionReference:
    def __init__(self, docs=None, subcollections=None):
        self._docs = docs if docs is not None else {}  # id -> data
        self._subcollections = subcollections if subcollections is not None else {}
        self._filters = []
        self._limit = None

    def _view(self):
        view = MockCollectionReference(self._docs, self._subcollections)
        view._filters = list(self._filters)
        view._limit = self._limit
        return view

    def document(self, doc_id=None):
        return MockDocumentReference(collection=self, id=doc_id)

    def add(self, data):
        ref = self.document()
        ref.set(data)
        return None, ref

    def order_by(self, *args, **kwargs):
        return self

    def limit(self, count):
        view = self._view()
        view._limit = count
        return view

    def where(self, field, op, value):
        # Only == is supported
        view = self._view()
        view._filters.append((field, value))
        return view

    def stream(self):
        ids = [
            doc_id for doc_id, data in list(self._docs.items())
            if all(data.get(field) == value for field, value in self._filters)
        ]
        if self._limit is not None:
            ids = ids[: self._limit]
        for doc_id in ids:
            yield MockDocumentReference(collection=self, id=doc_id)

    def get(self):
        return list(self.stream())


class MockFirestoreClient:
    def __init__(self):
        self._collections = {}

    def collection(self, name):
        if name not in self._collections:
            self._collections[name] = MockCollectionReference()
        return self._collections[name]

    def batch(self):
        return MockBatch(self)


class MockBatch:
    def __init__(self, client):
        self.client = client
        self._ops = []
        self.committed = False

    def set(self, ref, data, merge=False):
        self._ops.append(("set", ref, data, merge))

    def update(self, ref, data):
        self._ops.append(("update", ref, data, False))

    def delete(self, ref):
        self._ops.append(("delete", ref, None, False))

    def commit(self):
        for op, ref, data, merge in self._ops:
            if op == "set":
                ref.set(data, merge=merge)
            elif op == "update":
                ref.update(data)
            else:
                ref.delete()
        self._ops = []
        self.committed = True


def _init_admin_app() -> None:
    if firebase_admin._apps:
        return
    info = settings.service_account_info()
    try:
        if info:
            firebase_admin.initialize_app(
                credentials.Certificate(info),
                {"projectId": settings.PROJECT_ID or info["project_id"]},
            )
        else:
            firebase_admin.initialize_app()
    except Exception as e:
        logger.warning("Firebase Admin init failed: %s", e)


def _create_client():
    info = settings.service_account_info()
    if info:
        from google.oauth2 import service_account
        cred = service_account.Credentials.from_service_account_info(info)
        return firestore.Client(project=settings.PROJECT_ID or info["project_id"], credentials=cred)
    if settings.PROJECT_ID:
        return firestore.Client(project=settings.PROJECT_ID)
    return firestore.Client()


# ---------- Initialization ---------- #

if settings.USE_MOCK_DB:
    logger.warning("!!! USING MOCK DB !!!")
    db = MockFirestoreClient()
else:
    if not settings.PROJECT_ID:
        logger.warning("GOOGLE_CLOUD_PROJECT not set. Falling back to credential defaults.")
    _init_admin_app()
    db = _create_client()
