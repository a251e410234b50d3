#!/usr/bin/env python3
"""
Validation script for URL Shortener service.
Tests the live running service to ensure all functionality works correctly.
"""

import sys
import time
import requests
from typing import Optional
from datetime import datetime


INVALID_URL_ERROR = "invalid url"
NOT_FOUND_ERROR = "No short URL found for given input"


class ServiceValidator:
    """Validates URL shortener service functionality."""

    def __init__(self, base_url: str = "http://localhost:3000", known_url: str = "https://www.freecodecamp.org"):
        self.base_url = base_url.rstrip("/")
        self.known_url = known_url
        self.session = requests.Session()
        self.test_results = []

    def print_header(self, text: str):
        """Print a formatted header."""
        print(f"\n{'='*60}")
        print(f"  {text}")
        print(f"{'='*60}\n")

    def print_test(self, name: str, passed: bool, details: str = ""):
        """Print test result."""
        status = "✅ PASS" if passed else "❌ FAIL"
        self.test_results.append((name, passed))
        print(f"{status} - {name}")
        if details:
            print(f"       {details}")

    def _shorten(self, url: str, as_json: bool = False) -> requests.Response:
        if as_json:
            return self.session.post(f"{self.base_url}/api/shorturl", json={"url": url}, timeout=10)
        return self.session.post(f"{self.base_url}/api/shorturl", data={"url": url}, timeout=10)

    def test_health_check(self) -> bool:
        """Test health check endpoint."""
        try:
            response = self.session.get(f"{self.base_url}/api/health", timeout=5)
            if response.status_code == 200:
                data = response.json()
                is_healthy = (
                    data.get("status") == "healthy" and
                    data.get("database") == "healthy"
                )
                details = f"DB: {data.get('database')}, Cache: {data.get('cache', 'N/A')}"
                self.print_test("Health Check", is_healthy, details)
                return is_healthy
            else:
                self.print_test("Health Check", False, f"Status: {response.status_code}")
                return False
        except requests.RequestException as e:
            self.print_test("Health Check", False, f"Error: {str(e)}")
            return False

    def test_create_short_url(self) -> Optional[int]:
        """Test creating a short URL from form data."""
        try:
            response = self._shorten(self.known_url)
            data = response.json()
            short_url = data.get("short_url")
            passed = (
                response.status_code == 200
                and data.get("original_url") == self.known_url
                and isinstance(short_url, int)
            )
            self.print_test("Create Short URL", passed, f"Response: {data}")
            return short_url if passed else None
        except (requests.RequestException, ValueError) as e:
            self.print_test("Create Short URL", False, f"Error: {str(e)}")
            return None

    def test_idempotent_create(self, short_url: int) -> bool:
        """Resubmitting the same URL (as JSON this time) returns the same id."""
        try:
            data = self._shorten(self.known_url, as_json=True).json()
            passed = data.get("short_url") == short_url
            self.print_test("Idempotent Create", passed, f"Expected {short_url}, got {data.get('short_url')}")
            return passed
        except (requests.RequestException, ValueError) as e:
            self.print_test("Idempotent Create", False, f"Error: {str(e)}")
            return False

    def test_monotonic_create(self, short_url: int) -> bool:
        """A new URL gets a larger id."""
        try:
            fresh_url = f"https://www.example.com/?validate={int(time.time() * 1000)}"
            data = self._shorten(fresh_url).json()
            new_id = data.get("short_url")
            passed = isinstance(new_id, int) and new_id > short_url
            self.print_test("Monotonic Ids", passed, f"{fresh_url} -> {new_id}")
            return passed
        except (requests.RequestException, ValueError) as e:
            self.print_test("Monotonic Ids", False, f"Error: {str(e)}")
            return False

    def test_redirect(self, short_url: int) -> bool:
        """Test URL redirect functionality."""
        try:
            response = self.session.get(
                f"{self.base_url}/api/shorturl/{short_url}",
                allow_redirects=False,
                timeout=5
            )

            location = response.headers.get("Location", "")
            passed = response.status_code == 302 and location == self.known_url
            self.print_test("URL Redirect", passed, f"Status: {response.status_code}, Location: {location}")
            return passed
        except requests.RequestException as e:
            self.print_test("URL Redirect", False, f"Error: {str(e)}")
            return False

    def test_invalid_urls(self) -> bool:
        """Malformed, non-http and unresolvable URLs are all rejected."""
        all_passed = True
        for url in ("not a url", "ftp://example.com", "https://no-such-host.invalid"):
            try:
                data = self._shorten(url).json()
                passed = data == {"error": INVALID_URL_ERROR}
            except (requests.RequestException, ValueError) as e:
                data, passed = str(e), False
            self.print_test(f"Invalid URL Rejection ({url})", passed, f"Response: {data}")
            all_passed = all_passed and passed
        return all_passed

    def test_nonexistent_id(self) -> bool:
        """Test resolving an id that was never assigned."""
        try:
            stats = self.session.get(f"{self.base_url}/api/stats", timeout=5).json()
            unused_id = (stats.get("max_short_url") or 0) + 1000
            data = self.session.get(
                f"{self.base_url}/api/shorturl/{unused_id}",
                allow_redirects=False,
                timeout=5,
            ).json()
            passed = data == {"error": NOT_FOUND_ERROR}
            self.print_test("Non-existent Id", passed, f"Id {unused_id}: {data}")
            return passed
        except (requests.RequestException, ValueError) as e:
            self.print_test("Non-existent Id", False, f"Error: {str(e)}")
            return False

    def test_non_numeric_id(self) -> bool:
        """Test resolving a non-numeric identifier."""
        try:
            data = self.session.get(
                f"{self.base_url}/api/shorturl/abc",
                allow_redirects=False,
                timeout=5,
            ).json()
            passed = data == {"error": INVALID_URL_ERROR}
            self.print_test("Non-numeric Id", passed, f"Response: {data}")
            return passed
        except (requests.RequestException, ValueError) as e:
            self.print_test("Non-numeric Id", False, f"Error: {str(e)}")
            return False

    def test_web_interface(self) -> bool:
        """Test web interface homepage."""
        try:
            response = self.session.get(f"{self.base_url}/", timeout=5)

            is_ok = response.status_code == 200 and "text/html" in response.headers.get("content-type", "")
            self.print_test(
                "Web Interface",
                is_ok,
                f"Content-Type: {response.headers.get('content-type', 'N/A')}"
            )
            return is_ok
        except requests.RequestException as e:
            self.print_test("Web Interface", False, f"Error: {str(e)}")
            return False

    def run_all_tests(self) -> bool:
        """Run all validation tests."""
        self.print_header("URL Shortener Service Validation")
        print(f"Testing service at: {self.base_url}")
        print(f"Timestamp: {datetime.now().isoformat()}\n")

        if not self.test_health_check():
            print("\n❌ Health check failed. Service may not be running.")
            print(f"   Make sure the service is accessible at {self.base_url}")
            return False

        print()

        short_url = self.test_create_short_url()
        if short_url is not None:
            self.test_idempotent_create(short_url)
            self.test_monotonic_create(short_url)
            self.test_redirect(short_url)

        print()

        self.test_invalid_urls()
        self.test_nonexistent_id()
        self.test_non_numeric_id()

        print()

        self.test_web_interface()

        self.print_summary()

        return all(passed for _, passed in self.test_results)

    def print_summary(self):
        """Print test summary."""
        total = len(self.test_results)
        passed = sum(1 for _, p in self.test_results if p)
        failed = total - passed

        self.print_header("Test Summary")
        print(f"Total Tests:  {total}")
        print(f"✅ Passed:     {passed}")
        print(f"❌ Failed:     {failed}")
        print(f"Success Rate: {(passed/total*100):.1f}%")

        if failed > 0:
            print("\n⚠️  Failed tests:")
            for name, passed in self.test_results:
                if not passed:
                    print(f"   - {name}")

        print()


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Validate URL Shortener service functionality"
    )
    parser.add_argument(
        "--url",
        default="http://localhost:3000",
        help="Base URL of the service (default: http://localhost:3000)"
    )
    parser.add_argument(
        "--known-url",
        default="https://www.freecodecamp.org",
        help="Resolvable URL used for the create/redirect checks"
    )

    args = parser.parse_args()

    validator = ServiceValidator(args.url, known_url=args.known_url)

    try:
        success = validator.run_all_tests()
        sys.exit(0 if success else 1)
    except KeyboardInterrupt:
        print("\n\n⚠️  Validation interrupted by user")
        sys.exit(2)


if __name__ == "__main__":
    main()
