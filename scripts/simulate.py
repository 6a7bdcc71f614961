"""
Order Load Simulation Script

Fires a burst of concurrent orders at a running backend, walks some of them
through the status workflow and prints latency, duplicate-id and dashboard
figures.

Run from project root with the API running:
    python scripts/simulate.py --orders 50
"""

import asyncio
import sys
import random
import time
import argparse
from collections import Counter
from datetime import datetime
from typing import Any

import httpx

# Configuration
API_BASE_URL = "http://localhost:3001"
TOTAL_ORDERS = 50

# Sample data for random orders
FIRST_NAMES = ["Lucia", "Mateo", "Sofia", "Hugo", "Martina", "Pablo", "Valeria", "Leo", "Julia", "Daniel"]
LAST_NAMES = ["Garcia", "Fernandez", "Lopez", "Martinez", "Sanchez", "Perez", "Gomez", "Ruiz", "Diaz", "Moreno"]
STREETS = ["Calle Mayor", "Gran Via", "Calle de Alcala", "Paseo del Prado", "Calle Serrano"]
ZONES = ["centro", "norte", "sur", "este", "oeste"]
TIME_WINDOWS = ["19:30 - 20:00", "20:00 - 20:30", "20:30 - 21:00", "21:00 - 21:30"]
MENU_ITEMS = [
    {"rollType": "Chicken Tikka Roll", "price": 8.50},
    {"rollType": "Paneer Roll", "price": 7.50},
    {"rollType": "Lamb Seekh Roll", "price": 9.50},
    {"rollType": "Aloo Masala Roll", "price": 6.50},
    {"rollType": "Egg Roll", "price": 6.00},
]
STATUS_WALK = ["confirmed", "preparing", "out_for_delivery", "delivered"]


def generate_random_customer() -> dict[str, Any]:
    """Generate random customer info."""
    first = random.choice(FIRST_NAMES)
    last = random.choice(LAST_NAMES)
    customer = {
        "name": f"{first} {last}",
        "phone": f"6{random.randint(10, 99)} {random.randint(100, 999)} {random.randint(100, 999)}",
        "address": f"{random.choice(STREETS)} {random.randint(1, 200)}",
        "zone": random.choice(ZONES),
    }
    if random.random() < 0.6:
        customer["email"] = f"{first.lower()}.{last.lower()}@example.com"
    return customer


def generate_random_items() -> list[dict]:
    """Generate random order items."""
    items = []
    for _ in range(random.randint(1, 4)):
        item = random.choice(MENU_ITEMS).copy()
        item["quantity"] = random.randint(1, 3)
        items.append(item)
    return items


def generate_order_payload() -> dict[str, Any]:
    """Generate payload for /api/orders endpoint."""
    items = generate_random_items()
    return {
        "customer": generate_random_customer(),
        "items": items,
        "delivery": {"timeWindow": random.choice(TIME_WINDOWS)},
        "total": round(sum(i["price"] * i["quantity"] for i in items), 2),
        "specialInstructions": random.choice([
            None, "Extra chutney", "Ring doorbell", "Leave at door", "No onions"
        ]),
    }


async def send_order(
    client: httpx.AsyncClient,
    order_num: int
) -> dict[str, Any]:
    """Send one order."""
    payload = generate_order_payload()
    start_time = time.time()

    try:
        response = await client.post(
            f"{API_BASE_URL}/api/orders",
            json=payload,
            timeout=30.0
        )
        elapsed = round(time.time() - start_time, 3)

        if response.status_code == 201:
            return {
                "order_num": order_num,
                "success": True,
                "order_id": response.json().get("orderId"),
                "total": payload["total"],
                "time": elapsed,
            }
        return {
            "order_num": order_num,
            "success": False,
            "error": response.text[:100],
            "time": elapsed,
        }
    except httpx.HTTPError as e:
        elapsed = round(time.time() - start_time, 3)
        return {
            "order_num": order_num,
            "success": False,
            "error": str(e)[:100],
            "time": elapsed,
        }


async def walk_status(client: httpx.AsyncClient, order_id: str) -> int:
    """Move one order through the delivery workflow; returns failed steps."""
    failures = 0
    for status in STATUS_WALK[:random.randint(1, len(STATUS_WALK))]:
        response = await client.patch(
            f"{API_BASE_URL}/api/orders/{order_id}",
            json={"orderStatus": status},
            timeout=30.0,
        )
        if response.status_code != 200:
            failures += 1
    return failures


# =============================================================================
# MAIN SIMULATION RUNNER
# =============================================================================

async def run_simulation(num_orders: int = TOTAL_ORDERS, walk: bool = True) -> dict[str, Any]:
    """
    Run the load simulation.

    Args:
        num_orders: Number of orders to submit concurrently
        walk: Also push a sample of created orders through status updates
    """
    print("=" * 70)
    print("🔥 ORDER LOAD SIMULATION")
    print("=" * 70)
    print(f"📋 Total Orders: {num_orders}")
    print(f"🎯 Target: {API_BASE_URL}")
    print(f"⏰ Started: {datetime.now().strftime('%H:%M:%S')}")
    print("=" * 70)

    start_time = time.time()

    async with httpx.AsyncClient() as client:
        results = await asyncio.gather(*[send_order(client, i + 1) for i in range(num_orders)])

        successful = [r for r in results if r["success"]]
        failed = [r for r in results if not r["success"]]

        status_failures = 0
        if walk and successful:
            sample = random.sample(successful, k=max(1, len(successful) // 3))
            print(f"\n🛵 Walking {len(sample)} orders through the status workflow...")
            counts = await asyncio.gather(*[walk_status(client, r["order_id"]) for r in sample])
            status_failures = sum(counts)

        stats_response = await client.get(f"{API_BASE_URL}/api/dashboard/stats")

    total_time = round(time.time() - start_time, 2)

    print("\n" + "=" * 70)
    print("📊 SIMULATION RESULTS")
    print("=" * 70)

    print(f"\n✅ Successful Orders: {len(successful)}/{num_orders}")
    print(f"❌ Failed Orders: {len(failed)}/{num_orders}")
    print(f"⚠️  Failed Status Updates: {status_failures}")
    print(f"⏱️  Total Time: {total_time}s")

    if successful:
        times = [r["time"] for r in successful]
        print(f"\n📈 Performance Metrics:")
        print(f"   Average Response: {round(sum(times) / len(times), 3)}s")
        print(f"   Fastest: {min(times)}s")
        print(f"   Slowest: {max(times)}s")
        print(f"   💰 Submitted Revenue: €{sum(r['total'] for r in successful):.2f}")

        duplicates = [oid for oid, n in Counter(r["order_id"] for r in successful).items() if n > 1]
        if duplicates:
            print(f"\n⚠️ {len(duplicates)} duplicate order IDs: {duplicates[:5]}")
        else:
            print(f"✅ No duplicate order IDs")

    if failed:
        print(f"\n⚠️  Failed Order Details (showing first 5):")
        for f in failed[:5]:
            print(f"   Order #{f['order_num']}: {f.get('error', 'Unknown error')}")

    if stats_response.status_code == 200:
        stats = stats_response.json()
        print(f"\n📋 Dashboard (today):")
        print(f"   Orders: {stats['totalOrders']}")
        print(f"   Pending: {stats['pendingOrders']}")
        print(f"   Delivered: {stats['completedOrders']}")
        print(f"   Revenue: €{stats['totalRevenue']}")

    print("\n" + "=" * 70)

    return {
        "total": num_orders,
        "successful": len(successful),
        "failed": len(failed),
        "total_time": total_time,
        "results": results,
    }


async def check_health() -> bool:
    """Make sure the API is reachable before firing orders."""
    async with httpx.AsyncClient() as client:
        try:
            response = await client.get(f"{API_BASE_URL}/health", timeout=5.0)
        except httpx.HTTPError as e:
            print(f"❌ API unreachable: {e}")
            return False

    if response.status_code != 200:
        print(f"❌ Health check failed: {response.text}")
        return False

    print(f"✅ API healthy ({response.json().get('timestamp')})")
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Order Load Simulation Script")
    parser.add_argument("--orders", type=int, default=TOTAL_ORDERS, help="Number of orders")
    parser.add_argument("--url", default=API_BASE_URL, help="API base URL")
    parser.add_argument("--no-walk", action="store_true", help="Skip status updates")
    args = parser.parse_args()

    API_BASE_URL = args.url.rstrip("/")

    if not asyncio.run(check_health()):
        sys.exit(1)

    asyncio.run(run_simulation(num_orders=args.orders, walk=not args.no_walk))
