"""Seed a running notepad API with sample notes.

Posts a handful of tagged, colored notes so the list and search have
something to show. Notes whose title already exists are skipped by the
API, so running this twice is harmless.

Usage:
    python scripts/seed_data.py [--base-url http://localhost:8000]
"""

from __future__ import annotations

import argparse
import sys

import requests

DEFAULT_BASE_URL = "http://localhost:8000"
TIMEOUT = 10

# Each entry: (title, content, colorHex, comma-separated tags)
NOTES: list[tuple[str, str, str, str]] = [
    ("Groceries", "Eggs, milk, bread, coffee beans", "#FFFFEB3B", "home, shopping"),
    ("Work plan", "Finish Q3 roadmap draft and send for review", "#FFEF5350", "urgent, work"),
    ("Reading list", "Designing Data-Intensive Applications; The Pragmatic Programmer", "#FF42A5F5", "books"),
    ("Meeting notes", "Agreed to move the notes backend to Redis hashes", "#66BB6A", "work, meetings"),
    ("Gift ideas", "Board game for Sam, plant for the office", "#AB47BC", "personal"),
    ("Scratch", "", "#FFFFFF", ""),
]


def check_health(base_url: str) -> bool:
    """Verify the API is reachable and its store answered."""
    try:
        resp = requests.get(f"{base_url}/health", timeout=TIMEOUT)
        data = resp.json()
        return data.get("status") == "healthy"
    except Exception as e:
        print(f"  Health check failed: {e}")
        return False


def create_note(base_url: str, title: str, content: str, color: str, tags: str) -> dict:
    """POST a single note form and return the response body."""
    resp = requests.post(
        f"{base_url}/notes",
        json={"title": title, "content": content, "colorHex": color, "tags": tags},
        timeout=TIMEOUT,
    )
    resp.raise_for_status()
    return resp.json()


def main() -> None:
    """Create every sample note in order."""
    parser = argparse.ArgumentParser(description="Seed sample notes")
    parser.add_argument(
        "--base-url",
        default=DEFAULT_BASE_URL,
        help=f"Notepad API base URL (default: {DEFAULT_BASE_URL})",
    )
    args = parser.parse_args()
    base_url = args.base_url.rstrip("/")

    print(f"\n  Seeding notes via {base_url}")

    if not check_health(base_url):
        print("  FAIL: API is not healthy. Is it running with a reachable store?")
        sys.exit(1)

    created = skipped = failed = 0
    for i, (title, content, color, tags) in enumerate(NOTES, 1):
        try:
            result = create_note(base_url, title, content, color, tags)
        except requests.RequestException as e:
            failed += 1
            print(f"  [{i}/{len(NOTES)}] ERROR   {title}: {e}")
            continue
        if result["created"]:
            created += 1
            print(f"  [{i}/{len(NOTES)}] created {title}")
        else:
            skipped += 1
            print(f"  [{i}/{len(NOTES)}] exists  {title}")

    print(f"\n  Done: {created} created, {skipped} already present, {failed} failed.")
    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
