import time

import httpx

MOCK_SPEED_TEST = {
    "test_id": "test-uuid-123",
    "download_mbps": 50.5,
    "upload_mbps": 20.2,
    "latency_ms": 15,
    "jitter_ms": 2,
    "network_type": "4G",
    "signal_strength_dbm": -85,
    "device_type": "VerificationScript",
    "latitude": 36.7525,
    "longitude": 3.0420,
}


def run_smoke_check(client: httpx.Client) -> bool:
    """
    Exercise every public endpoint of a running backend once.

    `client` must have base_url set (a FastAPI TestClient works too).
    Prints one line per step; returns False on the first failure instead
    of raising.
    """
    try:
        print("1. Testing Root endpoint...")
        resp = client.get("/")
        resp.raise_for_status()
        print("   Status:", resp.status_code, "Data:", resp.text)

        print("2. Testing Download endpoint (1MB)...")
        start = time.monotonic()
        resp = client.get("/api/download", params={"size": 1})
        resp.raise_for_status()
        elapsed_ms = (time.monotonic() - start) * 1000
        print("   Status:", resp.status_code, "Size:", len(resp.content), "bytes",
              f"Duration: {elapsed_ms:.0f} ms")

        print("3. Testing Upload endpoint...")
        resp = client.post("/api/upload", json={"data": "test datatest data"})
        resp.raise_for_status()
        print("   Status:", resp.status_code)

        print("4. Testing Speed Test Submission (Mock Data)...")
        resp = client.post("/api/speedtest", json=MOCK_SPEED_TEST)
        resp.raise_for_status()
        print("   Status:", resp.status_code, "Response:", resp.json())
    except httpx.HTTPError as e:
        print("VERIFICATION FAILED:", e)
        return False

    print("VERIFICATION SUCCESSFUL")
    return True
