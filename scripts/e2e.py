#!/usr/bin/env python3
"""End-to-end tests for the CEP weather service.

Requires the service to be running with a valid WEATHER_API_KEY, and
reaches the real ViaCEP and WeatherAPI upstreams, so failures can come
from either provider being down.
Default: http://localhost:8080

Usage:
    # Start the service first:
    PORT=8080 WEATHER_API_KEY=... cep-weather

    # Run E2E tests:
    python3 scripts/e2e.py                           # default localhost:8080
    python3 scripts/e2e.py http://localhost:8080      # explicit URL
"""

from __future__ import annotations

import json
import sys
import time
import urllib.error
import urllib.request

BASE_URL = "http://localhost:8080"

passed = 0
failed = 0


def _get(path: str) -> tuple[int, bytes]:
    """GET and return (status, body), including error statuses."""
    req = urllib.request.Request(f"{BASE_URL}{path}")
    try:
        with urllib.request.urlopen(req, timeout=60) as resp:
            return resp.status, resp.read()
    except urllib.error.HTTPError as e:
        return e.code, e.read()


def test(name: str, fn):
    global passed, failed
    try:
        fn()
        print(f"  PASS  {name}")
        passed += 1
    except Exception as e:
        print(f"  FAIL  {name}: {e}")
        failed += 1


# ---------------------------------------------------------------------------
# Wait for service readiness
# ---------------------------------------------------------------------------

def wait_for_service(max_wait: int = 60):
    """Poll /health until the service is ready."""
    print(f"Waiting for service at {BASE_URL} ...")
    deadline = time.time() + max_wait
    while time.time() < deadline:
        try:
            status, body = _get("/health")
            if status == 200 and json.loads(body).get("status") == "ok":
                print("  Service is ready.\n")
                return
        except Exception:
            pass
        time.sleep(2)
    print("  Service did not become ready in time.")
    sys.exit(1)


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

def test_invalid_cep():
    status, body = _get("/weather/30280-100")
    assert status == 422, f"expected 422, got {status}"
    assert body.decode().strip() == "invalid zipcode", body


def test_unknown_cep():
    status, body = _get("/weather/90280100")
    assert status == 404, f"expected 404, got {status}"
    assert body.decode().strip() == "can not find zipcode", body


def test_known_cep():
    status, body = _get("/weather/30280160")
    assert status == 200, f"expected 200, got {status}: {body!r}"
    data = json.loads(body)
    assert set(data) == {"temp_K", "temp_C", "temp_F"}, data
    assert data["temp_K"] - data["temp_C"] == 273, data
    assert not (data["temp_C"] == 0 and data["temp_F"] == 0), data


def test_unknown_route():
    status, body = _get("/forecast/30280160")
    assert status == 404, f"expected 404, got {status}"
    assert body.decode() == "route does not exist", body


def test_method_not_allowed():
    req = urllib.request.Request(f"{BASE_URL}/weather/30280160", data=b"", method="POST")
    try:
        urllib.request.urlopen(req, timeout=10)
        raise AssertionError("expected 405")
    except urllib.error.HTTPError as e:
        assert e.code == 405, f"expected 405, got {e.code}"
        assert e.read().decode() == "method is not valid"


if __name__ == "__main__":
    if len(sys.argv) > 1:
        BASE_URL = sys.argv[1].rstrip("/")

    wait_for_service()

    print("Running E2E tests:")
    test("invalid cep -> 422", test_invalid_cep)
    test("unknown cep -> 404", test_unknown_cep)
    test("known cep -> 200 with kelvin = celsius + 273", test_known_cep)
    test("unknown route -> 404", test_unknown_route)
    test("POST -> 405", test_method_not_allowed)

    print(f"\n{passed} passed, {failed} failed")
    sys.exit(1 if failed else 0)
