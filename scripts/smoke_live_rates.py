"""Smoke script for the live rate table provider.

Builds the app against the 'vatcomply' provider and prints a few conversions
next to the same conversions under the built-in static table, so a drift in
the upstream format is easy to spot.

NOTE: needs network access; this is a diagnostic, not a formal test.
"""

import json
import os
import sys

from fastapi.testclient import TestClient

PAIRS = [("USD", "EUR"), ("EUR", "GBP"), ("JPY", "USD")]


def run():
    from fxwidget.core.config import Settings
    from fxwidget.main import create_app

    out = {}
    for provider in ("static", "vatcomply"):
        app = create_app(settings_override=Settings(rate_provider=provider))
        with TestClient(app) as client:
            rates = client.get("/api/rates")
            if rates.status_code != 200:
                out[provider] = {"error": rates.json()}
                continue
            out[provider] = {"as_of": rates.json()["date"], "pairs": {}}
            for src, dst in PAIRS:
                r = client.get(
                    "/api/convert", params={"amount": 100, "from_code": src, "to_code": dst}
                )
                body = r.json()
                out[provider]["pairs"][f"{src}->{dst}"] = {
                    "converted": body["converted_amount"],
                    "direct": body["direct_rate_line"],
                    "inverse": body["inverse_rate_line"],
                }
    print(json.dumps(out, indent=2))


if __name__ == "__main__":
    sys.path.append(os.getcwd())
    run()
