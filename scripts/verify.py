"""
Order Total Verification Script

Fetches every order from a running API and recomputes each total from the
joined restaurant's current menu. A mismatch means the menu changed after
the order was placed, or the stored total is wrong.
Run from project root: python scripts/verify.py

Version: 1.0.0
"""

import argparse
import os
import sys
from datetime import datetime

import httpx

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.errors import ItemNotFoundError
from app.schemas import OrderLine
from app.services.pricing import compute_total

API_BASE_URL = "http://localhost:5000"
TOLERANCE = 1e-6


def verify_orders(base_url: str = API_BASE_URL) -> bool:
    """Verify stored totals against current menus."""

    print("=" * 60)
    print("🔍 ORDER TOTAL VERIFICATION REPORT")
    print("=" * 60)
    print(f"⏰ Timestamp: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print(f"🎯 Target: {base_url}")
    print("=" * 60)

    try:
        response = httpx.get(f"{base_url}/orders", timeout=30.0)
        response.raise_for_status()
    except httpx.HTTPError as e:
        print(f"\n❌ Could not fetch orders: {e}")
        return False

    orders = response.json()
    print(f"\n📊 STATISTICS:")
    print(f"   Total Orders: {len(orders)}")

    mismatches = []
    unresolved = []
    for order in orders:
        restaurant = order.get("restaurantId")
        if not isinstance(restaurant, dict):
            unresolved.append(order["id"])
            continue

        lines = [OrderLine.model_validate(line) for line in order["items"]]
        try:
            expected = compute_total(restaurant["menu"], lines)
        except ItemNotFoundError as e:
            mismatches.append((order["id"], order["total"], f"menu no longer has {e.item}"))
            continue

        if abs(expected - order["total"]) > TOLERANCE:
            mismatches.append((order["id"], order["total"], expected))

    ids = [o["id"] for o in orders]
    if len(ids) != len(set(ids)):
        print(f"\n⚠️ {len(ids) - len(set(ids))} duplicate order IDs found!")
    else:
        print(f"✅ No duplicate order IDs")

    if unresolved:
        print(f"\n⚠️ {len(unresolved)} orders without a resolvable restaurant: {unresolved[:10]}")

    if mismatches:
        print(f"\n⚠️ {len(mismatches)} totals differ from current menus:")
        for order_id, stored, expected in mismatches[:10]:
            print(f"   Order #{order_id}: stored {stored}, current menu gives {expected}")
    else:
        print(f"✅ All totals match current menus")

    revenue = sum(o["total"] for o in orders)
    print(f"\n💰 REVENUE:")
    print(f"   Total: ${revenue:.2f}")
    if orders:
        print(f"   Average: ${revenue / len(orders):.2f}")

    print("\n" + "=" * 60)
    print("✅ VERIFICATION COMPLETE")
    print("=" * 60)

    return not mismatches and not unresolved


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Order Total Verification")
    parser.add_argument("--url", default=API_BASE_URL, help="API base URL")
    args = parser.parse_args()

    sys.exit(0 if verify_orders(args.url.rstrip("/")) else 1)
