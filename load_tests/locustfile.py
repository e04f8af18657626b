"""
Locust 부하 테스트 시나리오

테스트 시나리오:
1. 기본 동시성 테스트: 100명이 재고 100개 상품을 1개씩 장바구니에 담고 결제
2. 블랙프라이데이 시나리오: 300명이 재고 100개 상품 경쟁

검증 항목:
- 초과 판매 0건 (상품 재고가 음수가 되지 않음)
- 결제 실패는 재고 부족(400)만 허용

준비:
    python load_tests/setup_test_data.py --scenario stress --users 300
    RATE_LIMIT_MAX_REQUESTS=1000000 python -m app
"""

import itertools
import threading

from locust import HttpUser, TaskSet, between, events, task

CONTESTED_PRODUCT_ID = 1
USER_COUNT = 300

# 전역 메트릭 수집
oversold_count = 0
total_checkouts = 0
failed_checkouts = 0

_user_ids = itertools.cycle(range(1, USER_COUNT + 1))
_user_ids_lock = threading.Lock()


def _next_user_id() -> int:
    with _user_ids_lock:
        return next(_user_ids)


def _is_expected_rejection(message: str) -> bool:
    # 재고 부족, 빈 장바구니(다른 요청이 먼저 결제함)는 정상적인 실패
    return "exceeds stock" in message or message == "Cart is empty"


class ShopperTaskSet(TaskSet):
    """장바구니 담기 → 결제 사용자 행동 모델"""

    def on_start(self):
        self.user_id = _next_user_id()

    @task(2)
    def list_products(self):
        """상품 목록 조회 및 음수 재고 감지"""
        global oversold_count

        with self.client.get(
            "/api/products", name="[Product] List Products", catch_response=True
        ) as response:
            if response.status_code != 200:
                response.failure(f"List products failed: {response.status_code}")
                return
            negative = [p["id"] for p in response.json() if p.get("stock", 0) < 0]
            if negative:
                oversold_count += 1
                response.failure(f"Negative stock detected for {negative}! OVERSOLD!")
            else:
                response.success()

    @task(1)
    def view_product(self):
        """상품 상세 조회"""
        self.client.get(
            f"/api/products/{CONTESTED_PRODUCT_ID}", name="[Product] Get Product"
        )

    @task(5)
    def buy_contested_product(self):
        """장바구니 담기 후 결제 (핵심 동시성 테스트)"""
        global total_checkouts, failed_checkouts

        with self.client.post(
            f"/api/users/{self.user_id}/cart",
            json={"itemId": CONTESTED_PRODUCT_ID, "quantity": 1},
            name="[Cart] Add Item",
            catch_response=True,
        ) as response:
            if response.status_code == 201:
                response.success()
            elif response.status_code == 400 and _is_expected_rejection(
                response.json().get("error", "")
            ):
                response.success()
                return
            else:
                response.failure(f"Add to cart failed: {response.status_code}")
                return

        with self.client.post(
            f"/api/users/{self.user_id}/checkout",
            name="[Checkout] Checkout",
            catch_response=True,
        ) as response:
            if response.status_code == 200:
                total_checkouts += 1
                stock = next(
                    p["stock"]
                    for p in response.json()["products"]
                    if p["id"] == CONTESTED_PRODUCT_ID
                )
                if stock < 0:
                    oversold_count += 1
                    response.failure("Negative stock detected! OVERSOLD!")
                else:
                    response.success()
            elif response.status_code == 400:
                message = response.json().get("error", "")
                if _is_expected_rejection(message):
                    failed_checkouts += 1
                    response.success()
                else:
                    response.failure(f"Checkout failed with unexpected error: {message}")
            else:
                response.failure(f"Checkout failed: {response.status_code}")


class NormalUser(HttpUser):
    """일반 사용자 (일반적인 쇼핑 행동)"""

    tasks = [ShopperTaskSet]
    wait_time = between(1, 3)
    host = "http://localhost:5000"


class AggressiveBuyer(HttpUser):
    """공격적인 구매자 (블랙프라이데이 시나리오)"""

    tasks = [ShopperTaskSet]
    wait_time = between(0.1, 0.5)
    host = "http://localhost:5000"


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    """테스트 시작 시 초기화"""
    global oversold_count, total_checkouts, failed_checkouts
    oversold_count = 0
    total_checkouts = 0
    failed_checkouts = 0

    print("\n" + "=" * 60)
    print("🚀 Locust Load Test Started")
    print("=" * 60)
    print(f"Target: {environment.host}")
    print("=" * 60 + "\n")


@events.test_stop.add_listener
def on_test_stop(environment, **kwargs):
    """테스트 종료 시 결과 출력"""
    print("\n" + "=" * 60)
    print("📊 Test Results Summary")
    print("=" * 60)
    print(f"✅ Successful Checkouts: {total_checkouts}")
    print(f"❌ Rejected Checkouts (Stock Exhausted): {failed_checkouts}")
    print(f"🚨 OVERSOLD Detected: {oversold_count}")
    print("=" * 60)

    if oversold_count > 0:
        print("❌ FAIL: Overselling detected! Checkout is not serialized.")
    else:
        print("✅ PASS: No overselling detected.")

    print("=" * 60 + "\n")


"""
기본 실행 (웹 UI):
    locust -f load_tests/locustfile.py --host=http://localhost:5000

헤드리스 모드 (CLI):
    # 시나리오 1: 100명 동시 구매 테스트 (60초)
    locust -f load_tests/locustfile.py --headless --users 100 --spawn-rate 10 -t 60s

    # 시나리오 2: 블랙프라이데이 (300명, 2분)
    locust -f load_tests/locustfile.py --headless --users 300 --spawn-rate 30 -t 2m --user-classes AggressiveBuyer

다중 워커 서버에서는 LOCK_BACKEND=redis 로 실행해야 초과 판매가 없습니다:
    ENABLE_CLUSTERING=true LOCK_BACKEND=redis RATE_LIMIT_MAX_REQUESTS=1000000 python -m app
"""
