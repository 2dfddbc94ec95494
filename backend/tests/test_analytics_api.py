from pathlib import Path
import sys

sys.path.append(str(Path(__file__).resolve().parents[2]))

from backend.app.analytics.core import COMPUTATION_VERSION

HEADER = "X-Author-Key"


def _seed(api_client, key, rows):
    for row in rows:
        res = api_client.post("/api/transactions", json=row, headers={HEADER: key})
        assert res.status_code == 201


def test_analytics_scenario(api_client, author_key):
    _seed(
        api_client,
        author_key,
        [
            {"account": "工商银行", "amount": 199.99, "date": "2024-01-15T10:00:00Z", "description": "购物"},
            {"account": "招商银行", "amount": "88.5", "date": "2024-01-20", "description": "餐饮"},
        ],
    )

    body = api_client.get("/api/analytics", headers={HEADER: author_key}).json()

    assert body["computation_version"] == COMPUTATION_VERSION
    assert body["is_sample"] is False
    assert [(m["label"], m["total"]) for m in body["monthly"]] == [("Jan 2024", 288.49)]
    assert [(c["label"], c["total"]) for c in body["categories"]] == [("购物", 199.99), ("餐饮", 88.5)]
    assert body["monthly"][0]["count"] == 2
    assert len(body["monthly"][0]["supporting_ids"]) == 2
    assert body["totals"]["transaction_count"] == 2
    assert body["totals"]["all"] == 288.49
    assert body["totals"]["dated"] == 288.49
    assert body["totals"]["invalid_date_ids"] == []


def test_analytics_top_categories(api_client, author_key):
    _seed(
        api_client,
        author_key,
        [
            {"account": "A", "amount": amount, "date": "2024-02-01", "description": name}
            for name, amount in [("交通", 5), ("餐饮", 30), ("购物", 20)]
        ],
    )

    body = api_client.get("/api/analytics", params={"top": 2}, headers={HEADER: author_key}).json()

    assert [c["label"] for c in body["categories"]] == ["餐饮", "购物"]
    assert body["totals"]["all"] == 55.0


def test_analytics_without_key_uses_sample(api_client):
    body = api_client.get("/api/analytics").json()

    assert body["is_sample"] is True
    assert body["totals"]["transaction_count"] == 3
    assert body["totals"]["all"] == 323.49
    assert [c["label"] for c in body["categories"]] == ["购物", "餐饮", "交通"]


def test_dashboard_limits_months_and_recent_rows(api_client, author_key):
    _seed(
        api_client,
        author_key,
        [
            {"account": "A", "amount": month, "date": f"2024-{month:02d}-10", "description": "餐饮"}
            for month in range(1, 9)
        ],
    )

    body = api_client.get("/api/analytics/dashboard", headers={HEADER: author_key}).json()

    assert body["is_sample"] is False
    assert [m["label"] for m in body["monthly"]] == [
        "Mar 2024",
        "Apr 2024",
        "May 2024",
        "Jun 2024",
        "Jul 2024",
        "Aug 2024",
    ]
    assert [r["date_label"] for r in body["recent"]] == ["Aug 10", "Jul 10", "Jun 10", "May 10", "Apr 10"]


def test_dashboard_respects_env_config(api_client, monkeypatch):
    monkeypatch.setenv("DASHBOARD_MONTHS", "1")
    monkeypatch.setenv("RECENT_LIMIT", "2")

    body = api_client.get("/api/analytics/dashboard").json()

    assert body["is_sample"] is True
    assert len(body["monthly"]) == 1
    assert len(body["recent"]) == 2
    assert body["recent"][0]["date_label"] == "Today"
