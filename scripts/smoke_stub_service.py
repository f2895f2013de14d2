import json

from fastapi.testclient import TestClient

from convcheck.core.config import Settings
from convcheck.main import create_app
from convcheck.models.rates import RateTable

"""Smoke test for the local rate stub.
Reads the seeded table, simulates drift on one currency and removes another,
printing the cross-rate seen after each step.
"""


def run():
    settings = Settings(_env_file=None)
    settings.init_post_load()
    client = TestClient(create_app(settings_override=settings))

    def usd_try():
        table = RateTable.model_validate(client.get("/rates").json())
        return table.cross_rate("USD", "TRY")

    results = {"initial_usd_try": usd_try()}
    client.put("/rates/TRY", json={"rate": 36.0})
    results["drifted_usd_try"] = usd_try()
    results["remove_gbp"] = client.delete("/rates/GBP").json()
    missing = client.delete("/rates/GBP")
    results["remove_missing_status"] = missing.status_code
    results["remove_missing_body"] = missing.json()
    results["final_codes"] = sorted(client.get("/rates").json()["rates"])
    print(json.dumps(results, indent=2))


if __name__ == "__main__":
    run()
