"""Smoke check: hits the landing, liveness and signed-out list routes.

Usage:
    python scripts/smoke.py              # uses http://localhost:8000
    python scripts/smoke.py http://host  # custom base URL
"""

import sys

import httpx

BASE_URL = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:8000"


def check(client: httpx.Client, path: str) -> dict:
    resp = client.get(f"{BASE_URL}{path}")
    resp.raise_for_status()
    print(f"  {path} -> {resp.status_code}")
    return resp.json()


def main() -> None:
    print(f"Smoke testing {BASE_URL}\n")

    with httpx.Client(timeout=10) as client:
        landing = check(client, "/")
        health = check(client, landing["health"])
        if health.get("status") != "ok":
            sys.exit(f"Unexpected health payload: {health}")

        listing = check(client, "/supabase-test")
        if listing["user"] is not None:
            sys.exit("Expected the signed-out document list")

    print("\nDone!")


if __name__ == "__main__":
    main()
