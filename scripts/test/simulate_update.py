# scripts/test/simulate_update.py
"""Log in as a bar manager and report a headcount, like the manager dashboard does."""

import argparse
import requests

BACKEND_URL = "http://localhost:5000/api"


def simulate_update(username, password, bar_id, count):
    session = requests.Session()   # keeps the session cookie between calls

    resp = session.post(f"{BACKEND_URL}/login",
                        json={"username": username, "password": password}, timeout=10)
    if resp.status_code != 200:
        print(f"❌ Login as {username} → HTTP {resp.status_code}: {resp.text}")
        return
    user = resp.json()
    print(f"✅ Logged in as {user['username']} (manages bar {user['barId']})")

    resp = session.patch(f"{BACKEND_URL}/bars/{bar_id}/count", json={"count": count}, timeout=10)
    print(f"{'✅' if resp.ok else '❌'} PATCH bar {bar_id} count={count} → HTTP {resp.status_code}: {resp.text}")

    session.post(f"{BACKEND_URL}/logout", timeout=10)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Simulate a manager count update")
    parser.add_argument("--user", default="brats_manager")
    parser.add_argument("--password", default="bratspass123")
    parser.add_argument("--bar", type=int, default=1)
    parser.add_argument("--count", type=int, default=42)
    parser.add_argument("--url", default=BACKEND_URL)
    args = parser.parse_args()

    BACKEND_URL = args.url.rstrip("/")
    simulate_update(args.user, args.password, args.bar, args.count)
