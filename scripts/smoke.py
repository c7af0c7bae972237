"""
End-to-End Smoke Script

Walks a running server through sign-in, cart, checkout and reporting.
Run from project root: python scripts/smoke.py --admin-email boss@bistroboss.com

The admin email must already belong to a user with role "admin".
"""

import argparse
import asyncio
import random
import sys
import time
from typing import Any

import httpx

API_BASE_URL = "http://localhost:5000"

CUSTOMER_NAMES = ["Jane", "Omar", "Lena", "Kofi", "Mia", "Ravi"]
MENU_ITEMS = [
    {"name": "Caesar Salad", "category": "salad", "price": 10.5},
    {"name": "Tomato Soup", "category": "soup", "price": 6.0},
    {"name": "Margherita", "category": "pizza", "price": 14.0},
    {"name": "Tiramisu", "category": "dessert", "price": 7.5},
]


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def get_token(client: httpx.AsyncClient, email: str) -> str:
    response = await client.post(f"{API_BASE_URL}/jwt", json={"email": email})
    response.raise_for_status()
    return response.json()["token"]


def check(label: str, ok: bool, detail: Any = "") -> bool:
    print(f"   {'✅' if ok else '❌'} {label} {detail}")
    return ok


async def run_smoke(admin_email: str) -> bool:
    results = []
    started = time.time()

    async with httpx.AsyncClient(timeout=30.0) as client:
        print("\n1️⃣ Liveness...")
        response = await client.get(f"{API_BASE_URL}/")
        results.append(check("GET /", response.status_code == 200, response.text))

        print("\n2️⃣ Seeding menu as admin...")
        admin_token = await get_token(client, admin_email)
        for item in MENU_ITEMS:
            response = await client.post(
                f"{API_BASE_URL}/menu", json=item, headers=bearer(admin_token)
            )
            results.append(check(f"POST /menu {item['name']}", response.status_code == 200, response.json()))
        menu = (await client.get(f"{API_BASE_URL}/menu")).json()

        print("\n3️⃣ Customer sign-in...")
        name = random.choice(CUSTOMER_NAMES)
        email = f"{name.lower()}.{random.randint(1000, 9999)}@bistroboss.com"
        response = await client.post(f"{API_BASE_URL}/users", json={"email": email, "name": name})
        results.append(check("POST /users", response.status_code == 200, response.json()))
        token = await get_token(client, email)

        print("\n4️⃣ Filling the cart...")
        picked = random.sample(menu, k=min(3, len(menu)))
        for item in picked:
            await client.post(
                f"{API_BASE_URL}/carts",
                json={"email": email, "menuId": item["_id"], "name": item["name"], "price": item["price"]},
                headers=bearer(token),
            )
        cart = (await client.get(f"{API_BASE_URL}/carts", params={"email": email}, headers=bearer(token))).json()
        results.append(check("cart size", len(cart) == len(picked), len(cart)))

        print("\n5️⃣ Checkout...")
        total = round(sum(item["price"] for item in cart), 2)
        response = await client.post(
            f"{API_BASE_URL}/create-payment-intent", json={"price": total}, headers=bearer(token)
        )
        results.append(check("clientSecret", "clientSecret" in response.json()))

        response = await client.post(
            f"{API_BASE_URL}/payments",
            json={
                "email": email,
                "price": total,
                "transactionId": f"pi_smoke_{random.randint(100000, 999999)}",
                "cartIds": [item["_id"] for item in cart],
                "menuItemIds": [item["menuId"] for item in cart],
                "status": "pending",
            },
            headers=bearer(token),
        )
        results.append(check("POST /payments", "paymentResult" in response.json(), response.json()))
        cart = (await client.get(f"{API_BASE_URL}/carts", params={"email": email}, headers=bearer(token))).json()
        results.append(check("cart emptied", cart == []))

        print("\n6️⃣ Reports...")
        stats = (await client.get(f"{API_BASE_URL}/admin-stats", headers=bearer(admin_token))).json()
        results.append(check("GET /admin-stats", "totalRevenue" in stats, stats))
        rows = (await client.get(f"{API_BASE_URL}/order-stats", headers=bearer(admin_token))).json()
        results.append(check("GET /order-stats", isinstance(rows, list), rows))

        print("\n7️⃣ Auth gate...")
        response = await client.get(f"{API_BASE_URL}/users")
        results.append(check("401 without token", response.status_code == 401))
        response = await client.get(f"{API_BASE_URL}/users", headers=bearer(token))
        results.append(check("403 for customer", response.status_code == 403))

    print("\n" + "=" * 70)
    print(f"   {sum(results)}/{len(results)} checks passed in {time.time() - started:.2f}s")
    print("=" * 70)
    return all(results)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="End-to-end smoke test")
    parser.add_argument("--admin-email", required=True, help="Email of an existing admin user")
    parser.add_argument("--base-url", default=API_BASE_URL, help="Server base URL")
    args = parser.parse_args()

    API_BASE_URL = args.base_url.rstrip("/")

    ok = asyncio.run(run_smoke(args.admin_email))
    sys.exit(0 if ok else 1)
