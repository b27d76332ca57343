"""
Smoke test against a running server.
Run: python smoke_api.py [base_url]
"""
import sys
import uuid

import requests

BASE = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:5000"


def check_endpoints():
    print("Testing Surf Tracker API...\n")

    print("✓ Testing /health")
    r = requests.get(f"{BASE}/health")
    assert r.status_code == 200, r.text
    print(f"  Database: {r.json()['database']['status']}")

    name = f"Smoke Point {uuid.uuid4().hex[:6]}"
    print("✓ Testing POST /api/surf-spots")
    r = requests.post(f"{BASE}/api/surf-spots", json={
        "name": name,
        "latitude": 34.0,
        "longitude": -118.5,
        "breakType": "point",
        "skillRequirement": "advanced",
        "description": "smoke test",
    })
    assert r.status_code == 201, r.text
    spot = r.json()

    print("✓ Testing GET /api/surf-spots")
    r = requests.get(f"{BASE}/api/surf-spots")
    assert r.status_code == 200
    assert any(s["id"] == spot["id"] for s in r.json())

    print("✓ Testing POST /api/surf-sessions")
    r = requests.post(f"{BASE}/api/surf-sessions", json={
        "surfSpot": name,
        "date": "2025-01-01",
        "duration": 60,
        "waveCount": 5,
        "rating": 7,
        "conditionsRating": 6,
        "notes": "smoke test",
    })
    assert r.status_code == 201, r.text
    session = r.json()
    assert session["surf_spot_id"] == spot["id"]

    print("✓ Testing GET /api/dashboard")
    r = requests.get(f"{BASE}/api/dashboard")
    assert r.status_code == 200
    print(f"  {r.json()['totalSessions']} sessions, favorite: {r.json()['favoriteSpot']}")

    requests.delete(f"{BASE}/api/surf-sessions/{session['id']}")
    requests.delete(f"{BASE}/api/surf-spots/{spot['id']}")

    print("\n✅ All checks passed!")


if __name__ == "__main__":
    try:
        check_endpoints()
    except Exception as e:
        print(f"\n❌ Smoke test failed: {e}")
        sys.exit(1)
