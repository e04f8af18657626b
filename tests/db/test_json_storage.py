"""
JSON 파일 저장소 테스트
"""

import json

import pytest

from app.core.exceptions import StorageException
from app.db.json_storage import PRODUCTS, USERS, JsonFileStorage


class TestJsonFileStorage:
    """Test cases for JsonFileStorage."""

    def test_read_returns_documents(self, settings):
        """Test: 파일 전체를 문서 리스트로 읽음"""
        storage = JsonFileStorage(settings)

        products = storage.read(PRODUCTS)

        assert [p["id"] for p in products] == [1, 2, 3]

    def test_unknown_resource(self, settings):
        """Test: 알 수 없는 리소스 이름"""
        storage = JsonFileStorage(settings)

        with pytest.raises(ValueError):
            storage.path_for("orders")

    def test_read_missing_file(self, settings):
        """Test: 파일이 없으면 StorageException"""
        settings.users_path.unlink()
        storage = JsonFileStorage(settings)

        with pytest.raises(StorageException) as exc_info:
            storage.read(USERS)

        assert exc_info.value.resource == USERS
        assert exc_info.value.public_message == "Failed to read users"

    def test_read_invalid_json(self, settings):
        """Test: 잘못된 JSON은 StorageException"""
        settings.products_path.write_text("{not json", encoding="utf-8")

        with pytest.raises(StorageException):
            JsonFileStorage(settings).read(PRODUCTS)

    def test_read_non_array(self, settings):
        """Test: 최상위 값이 배열이 아니면 StorageException"""
        settings.products_path.write_text('{"id": 1}', encoding="utf-8")

        with pytest.raises(StorageException):
            JsonFileStorage(settings).read(PRODUCTS)

    def test_write_pretty_in_development(self, settings):
        """Test: 개발 모드에서는 들여쓰기하여 저장"""
        storage = JsonFileStorage(settings)

        storage.write(USERS, [{"id": 9, "cartItems": []}])

        raw = settings.users_path.read_text(encoding="utf-8")
        assert "\n  " in raw
        assert json.loads(raw) == [{"id": 9, "cartItems": []}]

    def test_write_compact_in_production(self, settings):
        """Test: 운영 모드에서는 공백 없이 저장"""
        production = settings.model_copy(update={"app_env": "production"})
        storage = JsonFileStorage(production)

        storage.write(USERS, [{"id": 9, "cartItems": []}])

        assert production.users_path.read_text(encoding="utf-8") == '[{"id":9,"cartItems":[]}]'

    def test_write_leaves_no_temp_files(self, settings):
        """Test: 쓰기 후 임시 파일이 남지 않음"""
        JsonFileStorage(settings).write(PRODUCTS, [])

        leftovers = [p.name for p in settings.data_dir.iterdir() if p.suffix == ".tmp"]
        assert leftovers == []

    def test_failed_write_keeps_existing_file(self, settings, monkeypatch):
        """Test: 교체 단계에서 실패하면 기존 파일 유지"""
        before = settings.products_path.read_text(encoding="utf-8")

        def broken_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("app.db.json_storage.os.replace", broken_replace)

        with pytest.raises(StorageException):
            JsonFileStorage(settings).write(PRODUCTS, [])

        assert settings.products_path.read_text(encoding="utf-8") == before
        assert not [p for p in settings.data_dir.iterdir() if p.suffix == ".tmp"]

    def test_write_unserializable(self, settings):
        """Test: 직렬화할 수 없는 값"""
        with pytest.raises(StorageException):
            JsonFileStorage(settings).write(PRODUCTS, [{"id": object()}])
