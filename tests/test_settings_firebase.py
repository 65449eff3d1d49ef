import json

import pytest

from dlxops import settings
from dlxops.firebase import MockFirestoreClient


class TestSettings:

    def test_batch_size_capped(self, monkeypatch):
        monkeypatch.setenv("FIRESTORE_BATCH_SIZE", "5000")
        assert settings.batch_size() == 500
        monkeypatch.setenv("FIRESTORE_BATCH_SIZE", "0")
        assert settings.batch_size() == 1
        monkeypatch.setenv("FIRESTORE_BATCH_SIZE", "abc")
        assert settings.batch_size() == 500

    def test_service_account_key_unescaped(self, monkeypatch):
        key = {"project_id": "demo", "private_key": "-----BEGIN-----\\nabc\\n-----END-----"}
        monkeypatch.setenv("FIREBASE_SERVICE_ACCOUNT_KEY", json.dumps(key))
        info = settings.service_account_info()
        assert info["project_id"] == "demo"
        assert info["private_key"] == "-----BEGIN-----\nabc\n-----END-----"

    @pytest.mark.parametrize("raw", ["", "not json", json.dumps({"private_key": "x"})])
    def test_service_account_key_unusable(self, monkeypatch, raw):
        monkeypatch.setenv("FIREBASE_SERVICE_ACCOUNT_KEY", raw)
        assert settings.service_account_info() is None

    def test_project_root(self, monkeypatch, tmp_path):
        monkeypatch.setenv("PROJECT_ROOT", str(tmp_path))
        assert settings.project_root() == str(tmp_path)


class TestMockFirestore:

    def test_batch_applies_on_commit(self):
        db = MockFirestoreClient()
        ref = db.collection("users").document("u1")
        ref.set({"a": 1})
        batch = db.batch()
        batch.update(ref, {"b": 2})
        assert ref.to_dict() == {"a": 1}
        batch.commit()
        assert ref.to_dict() == {"a": 1, "b": 2}

    def test_where_results_write_through(self):
        db = MockFirestoreClient()
        db.collection("users").document("u1").set({"rank": "starter"})
        db.collection("users").document("u2").set({"rank": "dlx-director"})
        docs = list(db.collection("users").where("rank", "==", "starter").stream())
        assert [d.id for d in docs] == ["u1"]
        docs[0].reference.update({"rank": "dlx-associate"})
        assert db.collection("users").document("u1").to_dict()["rank"] == "dlx-associate"

    def test_update_missing_document_fails(self):
        db = MockFirestoreClient()
        with pytest.raises(KeyError):
            db.collection("users").document("nope").update({"a": 1})
