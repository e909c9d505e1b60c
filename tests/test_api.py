from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from io import BytesIO

import pytest
from fastapi.testclient import TestClient
from openpyxl import load_workbook

from crashviz.main import create_app
from crashviz.api import router_export


@pytest.fixture
def client(store):
    with TestClient(create_app(store)) as c:
        yield c


def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "rows": 6, "cases": 5}


def test_choices(client):
    assert client.get("/api/choices/secondary").json()["choices"] == [
        "Weather", "Distraction", "Drug", "Number_of_Vehicles",
    ]
    r = client.get("/api/choices/bogus")
    assert r.status_code == 400
    assert "bogus" in r.json()["detail"]


def test_filter_options(client):
    r = client.get("/api/filter-options", params={"primary": "Day"})
    assert r.json()["options"][0] == "Sunday"
    assert len(r.json()["options"]) == 7


def test_distribution_with_filters(client):
    r = client.get("/api/distribution", params=[("primary", "Month"), ("filters", "January"), ("filters", "March")])
    body = r.json()
    assert body["total"] == 4
    assert body["bars"] == [{"value": "January", "count": 3}, {"value": "March", "count": 1}]


def test_crosstab(client):
    r = client.get("/api/crosstab", params={"primary": "Region", "secondary": "Weather"})
    assert r.status_code == 200
    assert {"Region": "Northeast", "Weather": "Rain", "count": 2} in r.json()["points"]


def test_summary(client):
    r = client.get("/api/summary", params={"group": "Region"})
    body = r.json()
    assert body["total"] == 6
    assert body["rows"][0]["value"] == "Northeast"
    assert sum(row["proportion"] for row in body["rows"]) == pytest.approx(1.0)


def test_summary_empty_filter(client):
    r = client.get("/api/summary", params={"group": "Month", "filters": "Smarch"})
    assert r.status_code == 200
    assert r.json()["rows"] == []


@pytest.mark.parametrize("path,params", [
    ("/api/distribution", {"primary": "Speed"}),
    ("/api/crosstab", {"primary": "Month", "secondary": "State"}),
    ("/api/summary", {"group": "Weather"}),
    ("/api/summary", {"group": "Month", "filter_var": "Speed"}),
    ("/api/view", {"primary": "Drug"}),
])
def test_unknown_variables_are_400(client, path, params):
    r = client.get(path, params=params)
    assert r.status_code == 400
    assert "Unknown variable" in r.json()["detail"]


def test_view_and_reset(client):
    view = client.get("/api/view", params={"primary": "State", "filters": "Ohio"}).json()
    assert view["state"]["filters"] == ["Ohio"]
    assert view["distribution"]["bars"] == [{"value": "Ohio", "count": 1}]
    assert client.get("/api/reset").json() == {
        "primary": "Month", "secondary": "Number_of_Vehicles", "summary": "Month", "filters": [],
    }


def test_summary_export(client):
    r = client.get("/api/summary/export", params={"group": "Region"})
    assert r.status_code == 200
    assert r.headers["content-type"].startswith(router_export.XLSX_MEDIA_TYPE)
    assert 'filename="Crash_Summary_Region.xlsx"' in r.headers["content-disposition"]
    wb = load_workbook(BytesIO(r.content))
    assert wb.sheetnames == ["Summary", "Distribution"]


def test_concurrent_exports_get_their_own_workbook(client):
    months = ["January", "February", "March"] * 10

    def export(month):
        r = client.get("/api/summary/export", params={"group": "Month", "filters": month})
        ws = load_workbook(BytesIO(r.content))["Summary"]
        return month, ws["A2"].value, ws.cell(row=12, column=1).value

    with ThreadPoolExecutor(max_workers=3) as pool:
        results = list(pool.map(export, months))

    for month, subtitle, first_group in results:
        assert subtitle.startswith(f"Filter: {month} ")
        assert first_group == month


def test_no_store_is_503():
    app = create_app()
    client = TestClient(app)  # no lifespan: nothing is loaded
    assert client.get("/api/health").status_code == 503
