"""
Order Simulation Script

Fires concurrent orders at a running API to exercise pricing under load.
A share of the orders names an off-menu item and must be rejected.
Run from project root: python scripts/simulate.py

Version: 1.0.0
"""

import asyncio
import argparse
import random
import sys
import time
from datetime import datetime
from typing import Any

import httpx

# Configuration
API_BASE_URL = "http://localhost:5000"
TOTAL_ORDERS = 50

RESTAURANT = {
    "name": "Simulation Pizzeria",
    "menu": [
        {"item": "Margherita", "price": 10},
        {"item": "Pepperoni", "price": 12},
        {"item": "Quattro Formaggi", "price": 14.5},
        {"item": "Garlic Bread", "price": 5.99},
        {"item": "Tiramisu", "price": 7.99},
        {"item": "Coke", "price": 2.99},
    ],
}
OFF_MENU_ITEMS = ["Hawaiian", "Sushi Roll", "margherita"]


def generate_order(restaurant_id: int, invalid: bool) -> dict[str, Any]:
    """Generate a random order, optionally with one off-menu line."""
    items = [
        {"item": random.choice(RESTAURANT["menu"])["item"], "quantity": random.randint(1, 3)}
        for _ in range(random.randint(1, 4))
    ]
    if invalid:
        items.insert(random.randrange(len(items) + 1), {"item": random.choice(OFF_MENU_ITEMS), "quantity": 1})
    return {"restaurantId": restaurant_id, "items": items}


async def send_order(
    client: httpx.AsyncClient,
    order_num: int,
    payload: dict[str, Any],
    invalid: bool,
) -> dict[str, Any]:
    """Send one order and record the outcome."""
    start_time = time.time()

    try:
        response = await client.post(f"{API_BASE_URL}/orders", json=payload, timeout=30.0)
        elapsed = round(time.time() - start_time, 3)
        data = response.json()
        return {
            "order_num": order_num,
            "status": response.status_code,
            "expected": 400 if invalid else 201,
            "total": data.get("total"),
            "error": data.get("message"),
            "time": elapsed,
        }
    except (httpx.HTTPError, ValueError) as e:
        # ValueError: the body was not JSON (e.g. a proxy error page)
        elapsed = round(time.time() - start_time, 3)
        return {
            "order_num": order_num,
            "status": response.status_code if isinstance(e, ValueError) else None,
            "expected": 400 if invalid else 201,
            "total": None,
            "error": str(e)[:100],
            "time": elapsed,
        }


async def run_simulation(num_orders: int = TOTAL_ORDERS, invalid_rate: float = 0.2) -> dict[str, Any]:
    """
    Seed a restaurant and fire orders concurrently.

    Args:
        num_orders: Number of orders to send
        invalid_rate: Share of orders carrying an off-menu item
    """
    print("=" * 70)
    print("🔥 ORDER SIMULATION")
    print("=" * 70)
    print(f"📋 Total Orders: {num_orders}")
    print(f"🎯 Target: {API_BASE_URL}")
    print(f"❌ Off-menu share: {invalid_rate:.0%}")
    print(f"⏰ Started: {datetime.now().strftime('%H:%M:%S')}")
    print("=" * 70)

    async with httpx.AsyncClient() as client:
        response = await client.post(f"{API_BASE_URL}/restaurants", json=RESTAURANT)
        response.raise_for_status()
        restaurant_id = response.json()["id"]
        print(f"\n🍕 Seeded restaurant #{restaurant_id}")

        plans = [random.random() < invalid_rate for _ in range(num_orders)]
        start_time = time.time()
        results = await asyncio.gather(*[
            send_order(client, i + 1, generate_order(restaurant_id, invalid), invalid)
            for i, invalid in enumerate(plans)
        ])
        total_time = round(time.time() - start_time, 2)

    accepted = [r for r in results if r["status"] == 201]
    rejected = [r for r in results if r["status"] == 400]
    unexpected = [r for r in results if r["status"] != r["expected"]]

    print("\n" + "=" * 70)
    print("📊 SIMULATION RESULTS")
    print("=" * 70)
    print(f"\n✅ Accepted: {len(accepted)}/{num_orders}")
    print(f"🚫 Rejected: {len(rejected)}/{num_orders}")
    print(f"⚠️  Unexpected outcome: {len(unexpected)}")
    print(f"⏱️  Total Time: {total_time}s")

    if accepted:
        avg_time = round(sum(r["time"] for r in accepted) / len(accepted), 3)
        revenue = sum(r["total"] for r in accepted)
        print(f"\n📈 Average Response: {avg_time}s")
        print(f"   💰 Total Revenue: ${revenue:.2f}")

    if unexpected:
        print("\n⚠️  Unexpected Details (showing first 5):")
        for r in unexpected[:5]:
            print(f"   Order #{r['order_num']}: got {r['status']}, expected {r['expected']} - {r['error']}")

    print("\n🔍 Next: python scripts/verify.py")
    print("=" * 70)

    return {
        "total": num_orders,
        "accepted": len(accepted),
        "rejected": len(rejected),
        "unexpected": len(unexpected),
        "total_time": total_time,
    }


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Order Simulation Script")
    parser.add_argument("--orders", type=int, default=TOTAL_ORDERS, help="Number of orders")
    parser.add_argument("--invalid-rate", type=float, default=0.2, help="Share of off-menu orders")
    parser.add_argument("--url", default=API_BASE_URL, help="API base URL")
    args = parser.parse_args()

    API_BASE_URL = args.url.rstrip("/")
    summary = asyncio.run(run_simulation(args.orders, args.invalid_rate))
    sys.exit(1 if summary["unexpected"] else 0)
