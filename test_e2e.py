#!/usr/bin/env python3
"""End-to-end check of a running API against the live document service.

Usage: python test_e2e.py <collection_name> [<collection_name> ...]
"""
import sys
import time
import requests

from docsearch.logging import init_logging

logger = init_logging()

API_BASE = "http://localhost:8000"

def test_api_health():
    """Test that API is responding and configured."""
    print("0. Checking API health...")
    try:
        response = requests.get(f"{API_BASE}/api/health/ready", timeout=5)
        response.raise_for_status()
        print("   ✅ API is ready")
        return True
    except requests.RequestException as e:
        print(f"   ❌ API health check failed: {e}")
        print("   💡 Make sure API is running: uvicorn docsearch.main:app")
        return False

def test_e2e_rank(collections):
    """List collections, upload a document, then rank a query over them."""
    print("🧪 Document Search E2E Test")
    print("="*40)

    # Step 1: List collections
    print("1. Listing collections...")
    response = requests.get(f"{API_BASE}/api/collections", timeout=30)
    if response.status_code != 200:
        print(f"   ❌ Listing failed: {response.json().get('error')}")
        return False
    names = [c["name"] for c in response.json()["collections"]]
    print(f"   ✅ {len(names)} collections: {', '.join(names)}")

    missing = [c for c in collections if c not in names]
    if missing:
        print(f"   ⚠️  Not on the service (expect errors for these): {', '.join(missing)}")

    # Step 2: Add a text document to the first collection
    print("2. Adding a test document...")
    path = f"e2e/refund-policy-{int(time.time())}.txt"
    body = {
        "collection_name": collections[0],
        "path": path,
        "content": {
            "type": "text",
            "text": "Refunds are issued within 30 days of purchase when the receipt is presented."
        },
        "metadata": {"source": "test_e2e"}
    }
    response = requests.post(f"{API_BASE}/api/documents", json=body, timeout=30)
    data = response.json()
    if response.status_code not in (200, 201):
        print(f"   ❌ Add failed ({response.status_code}): {data.get('error')}")
        return False
    print(f"   ✅ {data['message']} -> {path}")

    # Step 3: Adding the same path again must be rejected
    print("3. Re-adding without overwrite...")
    response = requests.post(f"{API_BASE}/api/documents", json=body, timeout=30)
    if response.status_code in (200, 201):
        print("   ❌ Duplicate path was accepted")
        return False
    print(f"   ✅ Rejected ({response.status_code}): {response.json().get('error')}")

    # Step 4: Rank
    print("4. Ranking a query...")
    response = requests.post(
        f"{API_BASE}/api/rank",
        json={"message": "refund policy", "selectedCollections": collections},
        timeout=60
    )
    data = response.json()
    if response.status_code != 200:
        print(f"   ❌ Rank failed: {data.get('error')}")
        return False

    print("   ✅ Response:")
    for line in data["response"].splitlines():
        print(f"      {line}")
    return True

def main():
    """Run the E2E test."""
    collections = sys.argv[1:]
    if not collections:
        print(__doc__)
        return 2

    if not test_api_health():
        return 1

    if test_e2e_rank(collections):
        print("\n🎉 E2E Test PASSED!")
        return 0
    else:
        print("\n💥 E2E Test FAILED!")
        print("\nDebugging tips:")
        print("- Check ZEROENTROPY_API_KEY is set for the API process")
        print("- Check API logs for remote.* error lines")
        return 1

if __name__ == "__main__":
    sys.exit(main())
