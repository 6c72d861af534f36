#!/usr/bin/env python3
"""
Seed script: registers users on the identity service and creates items on the
item service, all through the HTTP APIs (no direct DB).
Both services must be running.
  python scripts/seed_data.py
  python scripts/seed_data.py --users 20 --items-per-user 10
"""

import argparse
import random

import httpx

IDENTITY_BASE = "http://localhost:8081/api/v1/identity"
ITEMS_BASE = "http://localhost:8082/api/v1/items"
PASSWORD = "changeme123"

NAMES = [
    "Laptop stand", "Mechanical keyboard", "Wireless mouse", "USB-C cable",
    "27 inch monitor", "Webcam HD", "Bluetooth speaker", "Power bank",
    "Coffee maker", "Electric kettle", "Desk lamp", "Notebook",
]

DESCRIPTIONS = [
    "Great for home office and remote work.",
    "High quality build and reliable performance.",
    "Popular choice for developers and designers.",
    "",
]


def main():
    ap = argparse.ArgumentParser(description="Seed users and items via the two APIs")
    ap.add_argument("--users", type=int, default=10, help="Number of users to create")
    ap.add_argument("--items-per-user", type=int, default=5, help="Items per user")
    ap.add_argument("--identity-url", default=IDENTITY_BASE, help="Identity API base URL")
    ap.add_argument("--items-url", default=ITEMS_BASE, help="Items API base URL")
    args = ap.parse_args()

    created_users = []
    created_items = 0
    errors = []

    with httpx.Client(base_url=args.identity_url, timeout=30.0) as identity, httpx.Client(timeout=30.0) as items:
        print(f"Registering {args.users} users...")
        for i in range(args.users):
            email = f"user{i+1}@example.com"
            try:
                r = identity.post("/register", json={
                    "email": email,
                    "password": PASSWORD,
                    "display_name": f"User {i+1}",
                })
            except httpx.HTTPError as e:
                errors.append(f"Register {email}: {e}")
                continue
            if r.status_code in (201, 409):
                # 409: already registered on a previous run, same credentials
                created_users.append(email)
            else:
                errors.append(f"Register {email}: {r.status_code} {r.text[:80]}")

        print(f"Creating ~{len(created_users) * args.items_per_user} items (login + POST)...")
        for email in created_users:
            try:
                r = identity.post("/login", json={"email": email, "password": PASSWORD})
                if r.status_code != 200:
                    errors.append(f"Login {email}: {r.status_code}")
                    continue
                headers = {"Authorization": f"Bearer {r.json()['access_token']}"}
                for _ in range(args.items_per_user):
                    r2 = items.post(
                        args.items_url,
                        headers=headers,
                        json={"name": random.choice(NAMES), "description": random.choice(DESCRIPTIONS)},
                    )
                    if r2.status_code == 201:
                        created_items += 1
                    else:
                        errors.append(f"Item {email}: {r2.status_code} {r2.text[:80]}")
            except httpx.HTTPError as e:
                errors.append(f"User {email}: {e}")

    print(f"\nDone. Users: {len(created_users)}, Items created: {created_items}")
    if errors:
        print(f"Errors ({len(errors)}):")
        for e in errors[:15]:
            print("  ", e)
        if len(errors) > 15:
            print("  ... and", len(errors) - 15, "more")


if __name__ == "__main__":
    main()
