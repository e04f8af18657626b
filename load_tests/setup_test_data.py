#!/usr/bin/env python3
"""
부하 테스트 데이터 초기화 스크립트

부하 테스트 실행 전 상품/사용자 JSON 파일을 새로 씁니다.
서버가 실행 중이면 캐시 TTL(기본 5초)이 지난 뒤부터 새 데이터가 보입니다.
"""

import argparse
import json
import sys
from pathlib import Path


def build_products(stock: int) -> list[dict]:
    """경쟁 대상 상품 1개 + 재고가 넉넉한 일반 상품 2개"""
    return [
        {
            "id": 1,
            "title": "Black Friday Limited Edition",
            "price": 99.0,
            "stock": stock,
            "comments": [],
        },
        {"id": 2, "title": "Everyday Socks", "price": 5.5, "stock": 100000, "comments": []},
        {"id": 3, "title": "Coffee Mug", "price": 12, "stock": 100000, "comments": []},
    ]


def build_users(count: int) -> list[dict]:
    return [
        {"id": user_id, "name": f"loadtest_user_{user_id}", "cartItems": [], "cartCount": 0}
        for user_id in range(1, count + 1)
    ]


def write_collection(path: Path, documents: list[dict]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(documents, indent=2), encoding="utf-8")
    print(f"✅ Wrote {len(documents)} documents to {path}")


def main():
    parser = argparse.ArgumentParser(description="Setup data files for load testing")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=Path("data"),
        help="Data directory used by the server (default: data)",
    )
    parser.add_argument(
        "--scenario",
        choices=["basic", "stress", "custom"],
        default="basic",
        help="Test scenario preset",
    )
    parser.add_argument(
        "--stock",
        type=int,
        default=100,
        help="Initial stock of the contested product for custom scenario (default: 100)",
    )
    parser.add_argument(
        "--users",
        type=int,
        default=300,
        help="Number of users to create (default: 300)",
    )

    args = parser.parse_args()

    if args.scenario == "basic":
        # 재고 100개, 100명이 1개씩 구매
        stock = 100
    elif args.scenario == "stress":
        # 재고 100개, 300명 경쟁 (200명은 실패 예상)
        stock = 100
    else:
        stock = args.stock

    if stock < 0 or args.users < 1:
        print("❌ stock must be >= 0 and users must be >= 1")
        sys.exit(1)

    print("\n" + "=" * 60)
    print("Load Test Data Setup")
    print("=" * 60)
    print(f"Data dir: {args.data_dir}")
    print(f"Scenario: {args.scenario} (stock={stock}, users={args.users})")
    print("=" * 60 + "\n")

    write_collection(args.data_dir / "products.json", build_products(stock))
    write_collection(args.data_dir / "users.json", build_users(args.users))

    print("\n" + "=" * 60)
    print("✅ Test Data Setup Complete!")
    print("=" * 60)
    print("\nStart the server with a relaxed rate limit, e.g.:")
    print("  RATE_LIMIT_MAX_REQUESTS=1000000 python -m app")
    print("\nThen run Locust:")
    print("  locust -f load_tests/locustfile.py --host=http://localhost:5000")
    print("=" * 60 + "\n")


if __name__ == "__main__":
    main()
