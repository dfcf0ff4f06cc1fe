"""HTTP-level tests against the FastAPI app with stubbed providers."""

import pytest

from pricehub.services.base import SourceError

from tests.conftest import StubSource, make_series


@pytest.fixture
def rising_series(rising_prices):
    return make_series(rising_prices)


@pytest.fixture
def client(make_container, make_client, rising_series):
    source = StubSource(
        "stub",
        spot={"bitcoin": 60000.0, "ethereum": 3000.0},
        history={"bitcoin": rising_series, "ethereum": make_series([10.0, 11.0, 12.0])},
    )
    return make_client(make_container([source]))


class TestMeta:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"ok": True}

    def test_root_is_plain_text(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "running" in response.text


class TestPriceEndpoint:
    def test_prices_with_partial_failure(self, client):
        response = client.get("/api/price", params={"ids": "bitcoin,nocoin", "vs": "inr"})

        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert body["data"]["bitcoin"] == {"inr": pytest.approx(60000.0 * 83), "usd": 60000.0}
        assert body["data"]["nocoin"] == {"error": "unavailable"}
        assert "cached" not in body

    def test_ids_are_normalized(self, client):
        body = client.get("/api/price", params={"ids": " Bitcoin , ETHEREUM,", "vs": "USD"}).json()
        assert set(body["data"]) == {"bitcoin", "ethereum"}
        assert body["data"]["ethereum"] == {"usd": 3000.0}

    def test_defaults(self, client):
        body = client.get("/api/price").json()
        assert set(body["data"]) == {"bitcoin", "ethereum"}
        assert "inr" in body["data"]["bitcoin"]

    def test_empty_quote_uses_default(self, client):
        body = client.get("/api/price", params={"ids": "bitcoin", "vs": ""}).json()
        assert body["data"]["bitcoin"] == {"inr": pytest.approx(60000.0 * 83), "usd": 60000.0}

    def test_second_call_is_cached(self, client):
        client.get("/api/price", params={"ids": "bitcoin", "vs": "usd"})
        body = client.get("/api/price", params={"ids": "bitcoin", "vs": "usd"}).json()
        assert body["cached"] is True

    def test_fx_failure_is_500(self, client):
        response = client.get("/api/price", params={"ids": "bitcoin", "vs": "xyz"})
        assert response.status_code == 500
        body = response.json()
        assert body["ok"] is False
        assert "xyz" in body["error"]


class TestCompareEndpoint:
    def test_compare(self, client):
        response = client.get(
            "/api/compare", params={"symbols": "ethereum,nocoin", "days": 7, "vs": "usd"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["vs"] == "usd"
        assert body["days"] == 7
        eth, missing = body["items"]
        assert eth["id"] == "ethereum"
        assert [p[1] for p in eth["prices"]] == [10.0, 11.0, 12.0]
        assert isinstance(eth["prices"][0][0], int)
        assert "error" not in eth
        assert missing == {"id": "nocoin", "prices": [], "error": "history_unavailable"}

    def test_default_window(self, client, test_settings):
        body = client.get("/api/compare", params={"symbols": "ethereum"}).json()
        assert body["days"] == test_settings.default_days

    def test_long_window_accepted(self, client):
        body = client.get("/api/compare", params={"symbols": "ethereum", "days": 730}).json()
        assert body["days"] == 730

    def test_empty_quote_uses_default(self, client):
        body = client.get("/api/compare", params={"symbols": "ethereum", "vs": ""}).json()
        assert body["vs"] == "inr"
        assert [p[1] for p in body["items"][0]["prices"]] == pytest.approx([830.0, 913.0, 996.0])

    @pytest.mark.parametrize("days", ["0", "-3", "abc"])
    def test_bad_days_rejected(self, client, days):
        response = client.get("/api/compare", params={"days": days})
        assert response.status_code == 400
        assert response.json()["ok"] is False


class TestAnalyzeEndpoint:
    def test_analyze(self, client):
        response = client.get("/api/krypto/analyze", params={"symbol": "bitcoin", "vs": "inr"})

        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert body["symbol"] == "bitcoin"
        assert body["vs"] == "inr"
        assert body["latest_price"] == pytest.approx(199.0 * 83)
        assert body["signal"] == "bullish"
        assert set(body["indicators"]) >= {"sma20", "macdSignal", "macdHist", "trendSlope", "vol7"}
        assert "krypto_summary" not in body

    def test_empty_params_use_defaults(self, client):
        response = client.get("/api/krypto/analyze", params={"symbol": "", "vs": ""})

        assert response.status_code == 200
        body = response.json()
        assert body["symbol"] == "bitcoin"
        assert body["vs"] == "inr"

    def test_unresolvable_symbol_is_500(self, client):
        response = client.get("/api/krypto/analyze", params={"symbol": "nocoin", "vs": "usd"})

        assert response.status_code == 500
        assert response.json() == {
            "ok": False,
            "error": "all_history_sources_failed for nocoin",
        }

    def test_unexpected_error_is_500(self, make_container, make_client):
        source = StubSource("boom", history={"bitcoin": RuntimeError("kaput")})
        client = make_client(make_container([source]))

        response = client.get("/api/krypto/analyze", params={"symbol": "bitcoin", "vs": "usd"})

        assert response.status_code == 500
        assert response.json() == {"ok": False, "error": "kaput"}

    def test_falls_back_to_next_source(self, make_container, make_client, rising_series):
        first = StubSource("first", history={"bitcoin": SourceError("first", "http_429")})
        second = StubSource("second", history={"bitcoin": rising_series})
        client = make_client(make_container([first, second]))

        response = client.get("/api/krypto/analyze", params={"symbol": "bitcoin", "vs": "usd"})

        assert response.status_code == 200
        assert response.json()["latest_price"] == 199.0


class TestAnalyzeRawEndpoint:
    def test_too_few_points(self, client):
        prices = [[i, 100.0 + i] for i in range(39)]
        response = client.post("/api/krypto/analyze/raw", json={"prices": prices})

        assert response.status_code == 400
        assert response.json() == {"ok": False, "error": "prices array required (>=40 points)"}

    def test_exactly_forty_points(self, client):
        prices = [[i, 100.0 + i] for i in range(40)]
        response = client.post("/api/krypto/analyze/raw", json={"prices": prices})

        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert body["latest_price"] == 139.0
        assert body["signal"] in {"bullish", "bearish", "neutral"}
        for key in ("sma20", "rsi14", "macd", "macdSignal", "macdHist", "trendSlope", "vol7"):
            assert body["indicators"][key] is not None
        assert body["prediction"]["band_pct"][0] < body["prediction"]["band_pct"][1]
        assert body["summary"].startswith("Signal: ")

    def test_oversized_number_is_dropped(self, client):
        prices = [[i, 100.0 + i] for i in range(40)] + [[40, 10**400]]
        response = client.post("/api/krypto/analyze/raw", json={"prices": prices})

        assert response.status_code == 200
        assert response.json()["latest_price"] == 139.0

    def test_missing_body(self, client):
        response = client.post("/api/krypto/analyze/raw")
        assert response.status_code == 400

    def test_invalid_prices(self, client):
        response = client.post("/api/krypto/analyze/raw", json={"prices": [None] * 40})
        assert response.status_code == 400
        assert response.json()["error"] == "invalid prices"

    def test_defaults_and_no_network(self, client, rising_prices):
        response = client.post(
            "/api/krypto/analyze/raw", json={"prices": [[i, p] for i, p in enumerate(rising_prices)]}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["symbol"] == "bitcoin"
        assert body["vs"] == "inr"
        # raw prices are used as given, no FX applied
        assert body["latest_price"] == 199.0

    def test_direction_flips_with_trend(self, client, rising_prices):
        up = client.post("/api/krypto/analyze/raw", json={"prices": rising_prices}).json()
        down = client.post("/api/krypto/analyze/raw", json={"prices": rising_prices[::-1]}).json()

        assert up["signal"] == "bullish"
        assert down["signal"] == "bearish"
        for body in (up, down):
            assert 0.1 <= body["confidence"] <= 0.95
            low, high = body["prediction"]["band_abs"]
            assert low < high
