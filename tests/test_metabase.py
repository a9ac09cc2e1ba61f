import json

import pytest
import responses

from wytcore.httpclient import HttpClient
from wytcore.metabase import MetabaseDataSource, MetabaseError

BASE = "http://metabase.example.com"
SESSION_URL = BASE + "/api/session"
SAMPLE_RESULT = {"status": "completed", "row_count": 2, "data": {"rows": [["a", 1], ["b", 2]]}}


def card_url(card):
    return f"{BASE}/api/card/{card}/query"


@pytest.fixture
def rsps():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        mock.add(responses.POST, SESSION_URL, json={"id": "token"})
        yield mock


@pytest.fixture
def source():
    password = "password"
    return MetabaseDataSource(HttpClient(BASE), "user", password=password)


def card_calls(rsps):
    return [c for c in rsps.calls if "/api/card/" in c.request.url]


def body_of(call):
    return json.loads(call.request.body)


def test_auth_returns_token_and_caches(rsps, source):
    password = "password"
    assert source.auth("user", password) == "token"
    assert source.auth("user", password) == "token"
    session_calls = [c for c in rsps.calls if c.request.url == SESSION_URL]
    assert len(session_calls) == 1
    sent = json.loads(session_calls[0].request.body)
    assert sent == {"username": "user", "password": "password"}


def test_auth_missing_id_raises():
    password = "password"
    with responses.RequestsMock() as mock:
        mock.add(responses.POST, SESSION_URL, json={"other": 1})
        src = MetabaseDataSource(HttpClient(BASE), "user", password=password)
        with pytest.raises(MetabaseError):
            src.auth("user", password)


def test_auth_bad_json_raises():
    password = "password"
    with responses.RequestsMock() as mock:
        mock.add(responses.POST, SESSION_URL, body="not json")
        src = MetabaseDataSource(HttpClient(BASE), "user", password=password)
        with pytest.raises(MetabaseError):
            src.auth("user", password)


def test_shared_cache_skips_session(source):
    password = "password"
    cache = {("auth", "user"): "token"}
    with responses.RequestsMock() as mock:
        mock.add(responses.POST, card_url(110), json=SAMPLE_RESULT)
        src = MetabaseDataSource(HttpClient(BASE), "user", password=password, cache=cache)
        result = src.trader_overview("trader-a")
        assert result.status == "completed"
        assert mock.calls[0].request.headers["X-Metabase-Session"] == "token"


def test_daily_launched_defaults_to_utc_and_min_duration(rsps, source):
    rsps.add(responses.POST, card_url(106), json=SAMPLE_RESULT)
    result = source.daily_launched_token_info(3, "")
    assert result.row_count == 2
    assert result.data.rows == [["a", 1], ["b", 2]]
    call = card_calls(rsps)[0]
    assert call.request.headers["X-Metabase-Session"] == "token"
    param = body_of(call)["parameters"][0]
    assert param["id"] == "bb79b15e-1245-4166-96f0-c6baaa71567c"
    assert param["value"] == ["7"]
    assert param["target"] == ["variable", ["template-tag", "days"]]


def test_daily_launched_cst_keeps_larger_duration(rsps, source):
    rsps.add(responses.POST, card_url(115), json=SAMPLE_RESULT)
    result = source.daily_launched_token_info(14, "CST")
    assert result.row_count == 2
    body = body_of(card_calls(rsps)[0])
    assert body["ignore_cache"] is False
    assert body["collection_preview"] is False
    assert body["parameters"][0]["id"] == "a3066d17-b2fc-4d12-bf4a-92f81ab71d66"
    assert body["parameters"][0]["value"] == ["14"]


def test_unsupported_timezone_raises(rsps, source):
    with pytest.raises(MetabaseError):
        source.launched_token_time_distribution(7, "PST")
    assert card_calls(rsps) == []


@pytest.mark.parametrize(
    "method,timezone,card",
    [
        ("launched_token_time_distribution", "UTC", 107),
        ("launched_token_time_distribution", "CST", 114),
        ("daily_trade_counts", "UTC", 108),
        ("daily_trade_counts", "CST", 116),
    ],
)
def test_duration_cards(rsps, source, method, timezone, card):
    rsps.add(responses.POST, card_url(card), json=SAMPLE_RESULT)
    result = getattr(source, method)(7, timezone)
    assert result.status == "completed"
    assert card_calls(rsps)[0].request.url == card_url(card)


def test_trader_overview_params(rsps, source):
    rsps.add(responses.POST, card_url(110), json=SAMPLE_RESULT)
    result = source.trader_overview("trader-a")
    assert result.status == "completed"
    param = body_of(card_calls(rsps)[0])["parameters"][0]
    assert param["type"] == "category"
    assert param["value"] == "trader-a"
    assert param["id"] == "cd81bc1d-4a11-4375-84ea-e018c5d9ddef"


def test_trader_overview_v2_defaults_tz(rsps, source):
    rsps.add(responses.POST, card_url(140), json=SAMPLE_RESULT)
    result = source.trader_overview_v2("trader-a", "", 3)
    assert result.data.rows == [["a", 1], ["b", 2]]
    params = body_of(card_calls(rsps)[0])["parameters"]
    assert [p["target"][1][1] for p in params] == ["trader", "tz", "days"]
    assert params[1]["value"] == "CST"
    assert params[2]["value"] == ["3"]


def test_tx_time_distribution_empty_tz_has_empty_ids(rsps, source):
    rsps.add(responses.POST, card_url(112), json=SAMPLE_RESULT)
    result = source.trader_tx_time_distribution("trader-a", 5, "")
    assert result.row_count == 2
    params = body_of(card_calls(rsps)[0])["parameters"]
    assert [p["id"] for p in params] == ["", ""]
    assert params[1]["value"] == ["5"]


def test_tx_time_distribution_cst(rsps, source):
    rsps.add(responses.POST, card_url(120), json=SAMPLE_RESULT)
    result = source.trader_tx_time_distribution("trader-a", 5, "CST")
    assert result.status == "completed"
    params = body_of(card_calls(rsps)[0])["parameters"]
    assert params[0]["id"] == "b8f94534-7734-4e40-b8e4-212e0d876cda"
    assert params[1]["id"] == "e164924c-5361-411d-82de-34de55cd3e67"


def test_profit_token_distribution_utc(rsps, source):
    rsps.add(responses.POST, card_url(113), json=SAMPLE_RESULT)
    result = source.trader_profit_token_distribution("trader-a", 7, "UTC")
    assert result.row_count == 2
    params = body_of(card_calls(rsps)[0])["parameters"]
    assert params[0]["id"] == "586e6393-9ff0-4eac-9918-d10984d441c7"
    assert params[0]["value"] == "trader-a"


def test_profit_distribution_defaults_to_cst(rsps, source):
    rsps.add(responses.POST, card_url(118), json=SAMPLE_RESULT)
    result = source.trader_profit_distribution("trader-a", 7, "")
    assert result.status == "completed"
    params = body_of(card_calls(rsps)[0])["parameters"]
    assert params[0]["id"] == "f4bba41b-2de9-4fa1-9651-96d696aa221e"
    assert params[1]["id"] == "158050e1-75eb-4729-8567-1214ba6ff071"


@pytest.mark.parametrize(
    "duration,card,param_id",
    [
        (30, 125, "04f74b13-e4df-4836-b94b-72c1170dffcd"),
        (7, 124, "6f67544d-f340-4dd4-91ce-56a225d95a25"),
        (1, 131, "ec83280c-ba44-4968-9899-4a37d4f8a318"),
    ],
)
def test_top_trader_cards(rsps, source, duration, card, param_id):
    rsps.add(responses.POST, card_url(card), json=SAMPLE_RESULT)
    result = source.top_trader(duration, 0.5)
    assert result.row_count == 2
    param = body_of(card_calls(rsps)[0])["parameters"][0]
    assert param["id"] == param_id
    assert param["value"] == ["0.5"]
    assert param["target"] == ["variable", ["template-tag", "win_ratio"]]


def test_top_trader_formats_float32_shortest(rsps, source):
    rsps.add(responses.POST, card_url(131), json=SAMPLE_RESULT)
    result = source.top_trader(2, 0.6)
    assert result.status == "completed"
    param = body_of(card_calls(rsps)[0])["parameters"][0]
    assert param["value"] == ["0.6"]


def test_bad_card_response_raises(rsps, source):
    rsps.add(responses.POST, card_url(110), body="oops")
    with pytest.raises(MetabaseError):
        source.trader_overview("trader-a")


def test_connection_error_raises(rsps, source):
    rsps.add(responses.POST, card_url(110), body=ConnectionError("down"))
    with pytest.raises(MetabaseError):
        source.trader_overview("trader-a")