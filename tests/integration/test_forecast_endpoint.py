import json

import pytest

from grampredict.core.errors import UpstreamError
from grampredict.core.policy import AppRole
from grampredict.services.llm_provider_service import llm_service

def reply_for(months, fenced=True):
    body = json.dumps({"forecast": [{"month": f"M{i} 2025", "predicted": 6000 + 100 * i} for i in range(months)]})
    return f"```json\n{body}\n```" if fenced else body

@pytest.fixture()
def fake_llm(monkeypatch):
    calls = []
    state = {"reply": None, "error": None}

    async def fake_complete(messages, temperature=0.7):
        calls.append(messages)
        if state["error"] is not None:
            raise state["error"]
        return state["reply"]

    monkeypatch.setattr(llm_service, "complete", fake_complete)
    state["calls"] = calls
    return state

def test_forecast_success_and_persisted(client, login_as, district, fake_llm):
    login_as(AppRole.PUBLIC)
    fake_llm["reply"] = reply_for(6)

    res = client.post("/forecast/", json={"districtId": district.id, "blockName": "Kadiri", "months": 6})
    assert res.status_code == 200
    data = res.json()["forecast"]
    assert len(data) == 6
    assert data[0] == {"month": "M0 2025", "predicted": 6000}
    assert "block Kadiri" in fake_llm["calls"][0][1]["content"]

    history = client.get(f"/forecast/history/{district.id}").json()
    assert len(history) == 1
    assert history[0]["block_name"] == "Kadiri"
    assert history[0]["forecast_months"] == 6
    assert history[0]["backend"] == "llm"

def test_missing_block_is_sent_as_all(client, login_as, district, fake_llm):
    login_as()
    fake_llm["reply"] = reply_for(3, fenced=False)
    res = client.post("/forecast/", json={"districtId": district.id, "months": 3})
    assert res.status_code == 200
    assert "block All" in fake_llm["calls"][0][1]["content"]

def test_missing_district_makes_no_call(client, login_as, fake_llm):
    login_as()
    res = client.post("/forecast/", json={"months": 6})
    assert res.status_code == 400
    assert "error" in res.json()
    assert fake_llm["calls"] == []

def test_unknown_district_or_block_is_rejected(client, login_as, district, fake_llm):
    login_as()
    assert client.post("/forecast/", json={"districtId": "nope", "months": 6}).status_code == 400
    res = client.post("/forecast/", json={"districtId": district.id, "blockName": "Atlantis", "months": 6})
    assert res.status_code == 400
    assert "Atlantis" in res.json()["error"]
    assert fake_llm["calls"] == []

def test_bad_horizon_is_rejected(client, login_as, district, fake_llm):
    login_as()
    res = client.post("/forecast/", json={"districtId": district.id, "months": 7})
    assert res.status_code == 400
    assert fake_llm["calls"] == []

def test_parse_error_is_reported(client, login_as, district, fake_llm):
    login_as()
    fake_llm["reply"] = "not json"
    res = client.post("/forecast/", json={"districtId": district.id, "months": 6})
    assert res.status_code == 502
    assert "not valid JSON" in res.json()["error"]
    assert client.get(f"/forecast/history/{district.id}").json() == []

def test_upstream_error_is_reported(client, login_as, district, fake_llm):
    login_as()
    fake_llm["error"] = UpstreamError("AI_GATEWAY_API_KEY not configured")
    res = client.post("/forecast/", json={"districtId": district.id, "months": 6})
    assert res.status_code == 502
    assert res.json() == {"error": "AI_GATEWAY_API_KEY not configured"}

def test_forecast_requires_authentication(client, district):
    res = client.post("/forecast/", json={"districtId": district.id, "months": 6})
    assert res.status_code == 401

def test_export_csv_download(client, login_as):
    login_as()
    res = client.post("/forecast/export", json={
        "districtId": "d1",
        "forecast": [{"month": "Jan 2025", "predicted": 6500}, {"month": "Feb 2025", "predicted": 7200}],
    })
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/csv")
    assert 'filename="forecast-d1-' in res.headers["content-disposition"]
    assert res.text == "Month,Predicted Person-Days\nJan 2025,6500\nFeb 2025,7200"

def test_export_empty_is_no_content(client, login_as):
    login_as()
    res = client.post("/forecast/export", json={"districtId": "d1", "forecast": []})
    assert res.status_code == 204
    assert res.content == b""

@pytest.mark.parametrize("district_id", ['d1"; x=1', "d1\r\nSet-Cookie: a=b", "", "../d1"])
def test_export_rejects_unsafe_district_ids(client, login_as, district_id):
    login_as()
    res = client.post("/forecast/export", json={
        "districtId": district_id,
        "forecast": [{"month": "Jan 2025", "predicted": 6500}],
    })
    assert res.status_code == 422

def test_chart_figure(client, login_as):
    login_as()
    res = client.post("/forecast/chart", json={"forecast": [{"month": "Jan 2025", "predicted": 6500}]})
    assert res.status_code == 200
    fig = res.json()
    assert [t["type"] for t in fig["data"]] == ["bar", "scatter"]
