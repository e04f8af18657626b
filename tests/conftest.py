"""
pytest 픽스처 정의
"""

import json

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.rate_limit import SlidingWindowRateLimiter
from app.db.cache import SnapshotCache
from app.db.json_storage import JsonFileStorage
from app.db.locks import LocalLockManager
from app.db.store import DataStore
from app.main import create_app

SEED_PRODUCTS = [
    {
        "id": 1,
        "title": "Wireless Mouse",
        "price": 25.99,
        "stock": 5,
        "image": "/images/mouse.jpg",
        "comments": [],
    },
    {
        "id": 2,
        "title": "Mechanical Keyboard",
        "price": 89.5,
        "stock": 10,
        "comments": [
            {"user": "alice", "text": "Nice", "rating": 5},
            {"user": "bob", "text": "Okay", "rating": 4},
            {"user": "carol", "text": "Fine", "rating": 4},
        ],
    },
    {"id": 3, "title": "USB-C Hub", "price": 39, "stock": 0},
]

SEED_USERS = [
    {"id": 1, "name": "Alice", "cartItems": [], "cartCount": 0},
    {"id": 2, "name": "Bob", "cartItems": [{"itemId": 2, "quantity": 1}], "cartCount": 1},
]


class FakeClock:
    """테스트에서 시간을 직접 진행시키기 위한 시계"""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def write_json(path, data) -> None:
    path.write_text(json.dumps(data), encoding="utf-8")


def read_json(path):
    return json.loads(path.read_text(encoding="utf-8"))


@pytest.fixture
def data_dir(tmp_path):
    """시드 데이터가 들어 있는 임시 데이터 디렉터리"""
    directory = tmp_path / "data"
    directory.mkdir()
    write_json(directory / "products.json", SEED_PRODUCTS)
    write_json(directory / "users.json", SEED_USERS)
    return directory


@pytest.fixture
def settings(data_dir, tmp_path):
    """테스트용 설정 객체 픽스처"""
    images_dir = tmp_path / "images"
    images_dir.mkdir()
    return Settings(
        data_dir=data_dir,
        images_dir=images_dir,
        app_env="development",
        cache_ttl_seconds=5.0,
        rate_limit_max_requests=1000,
        rate_limit_window_seconds=60,
        max_comments_per_product=3,
        max_cart_lines=3,
        lock_backend="local",
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(settings, clock):
    """시계를 주입한 DataStore 픽스처"""
    return DataStore(
        storage=JsonFileStorage(settings),
        cache=SnapshotCache(settings.cache_ttl_seconds, clock=clock),
        locks=LocalLockManager(),
    )


@pytest.fixture
def test_app(settings, store, clock):
    """테스트 설정으로 생성한 FastAPI 앱"""
    limiter = SlidingWindowRateLimiter(
        settings.rate_limit_max_requests,
        settings.rate_limit_window_seconds,
        clock=clock,
    )
    return create_app(settings=settings, store=store, rate_limiter=limiter)


@pytest.fixture
def test_client(test_app):
    """FastAPI TestClient 픽스처"""
    with TestClient(test_app) as client:
        yield client


@pytest.fixture
def stored(settings):
    """디스크에 저장된 컬렉션을 직접 읽는 함수 픽스처"""

    def _read(resource: str):
        path = settings.products_path if resource == "products" else settings.users_path
        return read_json(path)

    return _read
