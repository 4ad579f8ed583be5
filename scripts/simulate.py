"""
Concurrency Simulation Script

Fires many concurrent checkouts at a running instance, then verifies order
integrity through the public endpoints.
Run from project root (with the API running on port 8001):

    python scripts/simulate.py --users 25
"""

import argparse
import asyncio
import random
import sys
import time
from datetime import datetime
from typing import Any

import httpx

# Configuration
API_BASE_URL = "http://localhost:8001"
TOTAL_USERS = 25

FIRST_NAMES = ["John", "Jane", "Mike", "Sarah", "Tom", "Emma", "David", "Lisa", "Chris", "Amy"]
LAST_NAMES = ["Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis"]
STREETS = ["Main St", "Broadway", "5th Avenue", "Park Ave", "Madison Ave"]


def generate_random_user(num: int, run_id: str) -> dict[str, str]:
    """Generate a registration payload with a unique email."""
    first = random.choice(FIRST_NAMES)
    last = random.choice(LAST_NAMES)
    return {
        "email": f"{first.lower()}.{last.lower()}.{run_id}.{num}@example.com",
        "password": "simulate",
        "name": f"{first} {last}",
        "address": f"{random.randint(1, 999)} {random.choice(STREETS)}",
        "phone": f"555-{random.randint(100, 999)}-{random.randint(1000, 9999)}",
        "birthDate": f"{random.randint(1950, 2005)}-{random.randint(1, 12):02d}-{random.randint(1, 28):02d}",
    }


async def place_order(
    client: httpx.AsyncClient,
    num: int,
    run_id: str,
    menu_ids: list[int],
) -> dict[str, Any]:
    """Register a user, fill a cart and check it out."""
    user = generate_random_user(num, run_id)
    email = user["email"]
    start_time = time.time()

    try:
        response = await client.post(f"{API_BASE_URL}/register", json=user)
        response.raise_for_status()

        for item_id in random.choices(menu_ids, k=random.randint(1, 4)):
            response = await client.post(f"{API_BASE_URL}/cart/{email}/{item_id}")
            response.raise_for_status()

        response = await client.post(f"{API_BASE_URL}/orders/{email}")
        response.raise_for_status()
        order = response.json()

        return {
            "num": num,
            "success": True,
            "order_id": order["id"],
            "total": order["total"],
            "time": round(time.time() - start_time, 3),
        }
    except httpx.HTTPError as e:
        return {
            "num": num,
            "success": False,
            "error": str(e)[:100],
            "time": round(time.time() - start_time, 3),
        }


async def run_simulation(num_users: int = TOTAL_USERS, confirm_ratio: float = 0.5) -> bool:
    """
    Run the simulation and verify the results.

    Args:
        num_users: Number of concurrent users checking out once each
        confirm_ratio: Share of the created orders to confirm afterwards

    Returns:
        bool: True if every integrity check passed
    """
    run_id = datetime.now().strftime("%H%M%S")

    print("=" * 60)
    print("🔥 CONCURRENT CHECKOUT SIMULATION")
    print("=" * 60)
    print(f"👥 Users: {num_users}")
    print(f"🎯 Target: {API_BASE_URL}")
    print(f"⏰ Started: {datetime.now().strftime('%H:%M:%S')}")
    print("=" * 60)

    async with httpx.AsyncClient(timeout=30.0) as client:
        response = await client.get(f"{API_BASE_URL}/menu")
        response.raise_for_status()
        menu_ids = [item["id"] for item in response.json()]

        before = (await client.get(f"{API_BASE_URL}/orders/summary")).json()

        start_time = time.time()
        results = await asyncio.gather(
            *[place_order(client, i + 1, run_id, menu_ids) for i in range(num_users)]
        )
        total_time = round(time.time() - start_time, 2)

        successful = [r for r in results if r["success"]]
        failed = [r for r in results if not r["success"]]

        to_confirm = random.sample(successful, int(len(successful) * confirm_ratio))
        for result in to_confirm:
            response = await client.put(f"{API_BASE_URL}/orders/{result['order_id']}/confirm")
            response.raise_for_status()

        after = (await client.get(f"{API_BASE_URL}/orders/summary")).json()

    print(f"\n✅ Successful checkouts: {len(successful)}/{num_users}")
    print(f"❌ Failed checkouts: {len(failed)}/{num_users}")
    print(f"⏱️  Total Time: {total_time}s")
    for f in failed[:5]:
        print(f"   User #{f['num']}: {f.get('error', 'Unknown error')}")

    if successful:
        revenue = sum(r["total"] for r in successful)
        print(f"💰 Revenue: ${revenue:.2f}")

    # Integrity checks
    print("\n" + "=" * 60)
    print("🔍 VERIFICATION REPORT")
    print("=" * 60)
    ok = True

    order_ids = [r["order_id"] for r in successful]
    duplicates = len(order_ids) - len(set(order_ids))
    if duplicates:
        print(f"⚠️ {duplicates} duplicate order IDs found!")
        ok = False
    else:
        print("✅ No duplicate order IDs")

    created = after["total"] - before["total"]
    if created != len(successful):
        print(f"⚠️ Summary grew by {created}, expected {len(successful)}")
        ok = False
    else:
        print(f"✅ Order summary grew by {created}")

    delivered = after["delivered"] - before["delivered"]
    if delivered != len(to_confirm):
        print(f"⚠️ {delivered} orders delivered, expected {len(to_confirm)}")
        ok = False
    else:
        print(f"✅ {delivered} orders confirmed as delivered")

    print("=" * 60)
    return ok


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Concurrent checkout simulation")
    parser.add_argument("--users", type=int, default=TOTAL_USERS, help="Number of users")
    parser.add_argument("--confirm-ratio", type=float, default=0.5, help="Share of orders to confirm")
    parser.add_argument("--url", default=API_BASE_URL, help="API base URL")
    args = parser.parse_args()

    API_BASE_URL = args.url.rstrip("/")
    passed = asyncio.run(run_simulation(args.users, args.confirm_ratio))
    sys.exit(0 if passed else 1)
