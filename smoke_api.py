#!/usr/bin/env python3
"""
Smoke test for a running doctor backend.

Walks every /api/doctor endpoint against a live server and reports the
failures. Expects seed data (``manage.py populate_data``) so that at
least one donor exists.

    SMOKE_BASE_URL=http://127.0.0.1:8000 python smoke_api.py
"""
import os
import sys
import time
from dataclasses import dataclass
from typing import Any, Optional

import requests

BASE_URL = os.getenv("SMOKE_BASE_URL", "http://127.0.0.1:8000").rstrip("/")
API = "/api/doctor"


@dataclass
class CallResult:
    success: bool
    endpoint: str
    method: str
    status_code: int
    response_time: float
    error_message: str = ""
    description: str = ""


class SmokeRunner:
    def __init__(self):
        self.session = requests.Session()
        self.session.headers["Content-Type"] = "application/json"
        self.results: list[CallResult] = []

    @property
    def errors(self) -> list[CallResult]:
        return [r for r in self.results if not r.success]

    def call(self, method: str, endpoint: str, data: Optional[dict] = None,
             expected_status: int = 200, description: str = "") -> Any:
        """Call one endpoint, record the outcome and return the decoded body (or None)."""
        url = f"{BASE_URL}{endpoint}"
        start_time = time.time()
        try:
            response = self.session.request(method, url, json=data, timeout=10)
        except requests.RequestException as e:
            result = CallResult(False, endpoint, method, 0, time.time() - start_time, str(e), description)
            self.results.append(result)
            print(f"❌ {method} {endpoint} - error: {e}")
            return None

        response_time = time.time() - start_time
        ok = response.status_code == expected_status
        result = CallResult(
            success=ok,
            endpoint=endpoint,
            method=method,
            status_code=response.status_code,
            response_time=response_time,
            error_message="" if ok else response.text[:200],
            description=description,
        )
        self.results.append(result)
        mark = "✅" if ok else "❌"
        print(f"{mark} {method} {endpoint} -> {response.status_code} ({response_time:.2f}s) {description}")
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    def run(self) -> bool:
        print(f"Doctor API smoke test against {BASE_URL}")
        print("=" * 50)

        self.call("GET", "/healthz", description="health check")
        self.call("GET", f"{API}/doctors", description="list doctors")
        doctor = self.call("POST", f"{API}/doctors",
                           {"name": "Dr. Smoke Test", "specialization": "Senior Doctor"}, 201, "create doctor")
        if not doctor:
            return self.report()

        existing = (self.call("GET", f"{API}/reports/unapproved", description="unapproved reports") or []) + \
                   (self.call("GET", f"{API}/reports/approved", description="approved reports") or [])
        if not existing:
            print("⚠️  no reports found; run `manage.py populate_data` first")
            self.call("DELETE", f"{API}/doctors/{doctor['id']}", expected_status=204, description="remove doctor")
            return self.report()
        donor_id = existing[0]["donorId"]

        report = self.call("POST", f"{API}/reports",
                           {"donorId": donor_id, "doctorId": doctor["id"], "healthStatus": "Pending"},
                           201, "create report")
        if report:
            rid = report["id"]
            self.call("GET", f"{API}/reports/{rid}", description="report by id")
            self.call("PUT", f"{API}/reports/{rid}/approve", description="approve")
            self.call("PUT", f"{API}/reports/{rid}/reject", description="reject")
            self.call("PUT", f"{API}/reports/{rid}/add-notes", {"notes": "Smoke test note."}, description="add notes")
            self.call("PUT", f"{API}/reports/{rid}/add-notes", {"notes": ""}, 400, description="blank notes rejected")
            self.call("PUT", f"{API}/reports/{rid}",
                      {"donorId": donor_id, "doctorId": doctor["id"], "healthStatus": "Pending"}, description="update")
            self.call("GET", f"{API}/reports/status/Pending", description="by status")
            self.call("GET", f"{API}/reports/doctor/{doctor['id']}", description="by doctor")
            self.call("GET", f"{API}/statistics/{doctor['id']}", description="statistics")
            self.call("DELETE", f"{API}/reports/{rid}", expected_status=204, description="delete report")
            self.call("DELETE", f"{API}/reports/{rid}", expected_status=404, description="delete again -> 404")

        self.call("GET", f"{API}/reports/donor/{donor_id}", description="donor report")
        self.call("GET", f"{API}/reports/donor/{donor_id}/latest", description="donor latest report")
        self.call("GET", f"{API}/reports/donor/{donor_id}/exists", description="donor has report")
        self.call("DELETE", f"{API}/doctors/{doctor['id']}", expected_status=204, description="remove doctor")
        return self.report()

    def report(self) -> bool:
        total = len(self.results)
        failed = self.errors
        print("\nSummary:")
        print(f"  calls:  {total}")
        print(f"  failed: {len(failed)}")
        for i, error in enumerate(failed, 1):
            print(f"{i}. {error.method} {error.endpoint} [{error.status_code}] {error.description}")
            print(f"   {error.error_message}")
        return not failed


def main():
    runner = SmokeRunner()
    sys.exit(0 if runner.run() else 1)


if __name__ == "__main__":
    main()
