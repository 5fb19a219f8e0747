"""Simple sanity check script to exercise the rewrite endpoint."""

from __future__ import annotations

from typing import Any

import httpx

API_URL = "http://localhost:8000/v1/text/rewrite"

BASE_OPTIONS: dict[str, Any] = {
    "active_voice": True,
    "clear_ownership": True,
    "sharper_impact": True,
    "calm_tone": True,
    "concise": True,
    "audit_safe_mode": True,
    "owner": "Operations",
    "document_type": "audit-finding",
    "english_variant": "en-GB",
    "standardise_spelling": True,
}


def run_sample(text: str, overrides: dict[str, Any]) -> None:
    """Send a sample request and dump the response."""
    with httpx.Client(timeout=30.0) as client:
        response = client.post(API_URL, json={"text": text, "options": {**BASE_OPTIONS, **overrides}})
        response.raise_for_status()
        data = response.json()
        print(f"Output: {data['rewritten_text']}")
        for change in data["change_log"]:
            print(f"  [{change['type']}] {change['description']}")
        for suggestion in data["suggestions"]:
            print(f"  hint: {suggestion}")
        print("-" * 60)


def main() -> None:
    """Invoke the rewrite endpoint with canned audit text."""
    sample_text = (
        "We note that access reviews were not completed in order to meet the deadline. "
        "The organization may analyze unauthorised changes at this stage."
    )
    scenarios = [
        {},
        {"english_variant": "en-US"},
        {"owner": None},
        {"audit_safe_mode": False, "document_type": "status-update"},
    ]

    for overrides in scenarios:
        run_sample(sample_text, overrides)


if __name__ == "__main__":
    main()
