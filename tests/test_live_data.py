import unittest
import os
import sys
import urllib.error
from datetime import datetime
from unittest.mock import patch

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core.config import Settings
from core.errors import ProviderError
from core.flights import search_flights, search_flights_simulated
from core.http import fetch_json
from core.stocks import format_market_cap, get_stock_price, get_stock_simulated
from core.weather import get_weather, get_weather_simulated

LIVE = Settings(use_live_data=True)
OFFLINE = Settings(use_live_data=False)

WTTR_PAYLOAD = {
    "current_condition": [{
        "temp_F": "71", "humidity": "20", "windspeedMiles": "9",
        "weatherDesc": [{"value": "Sunny"}],
    }],
    "nearest_area": [{"areaName": [{"value": "Austin"}], "country": [{"value": "United States of America"}]}],
    "weather": [
        {"maxtempF": str(80 + i), "mintempF": str(60 + i),
         "hourly": [{"weatherDesc": [{"value": "Clear"}]}]}
        for i in range(3)
    ],
}


class TestWeather(unittest.TestCase):

    def test_simulated_weather_is_deterministic(self):
        first = get_weather("Austin", OFFLINE)
        self.assertEqual(first, get_weather("Austin", OFFLINE))
        self.assertTrue(first["simulated"])
        self.assertEqual(first["source"], "Simulated Data")
        self.assertEqual([d["day"] for d in first["forecast"]], ["Today", "Tomorrow", "Day 3"])
        for day in first["forecast"]:
            self.assertGreater(day["high"], day["low"])

    def test_blank_location_means_the_conference_city(self):
        self.assertEqual(get_weather("  ", OFFLINE)["location"], "Las Vegas")

    def test_live_data_is_tried_by_default(self):
        self.assertTrue(Settings().use_live_data)
        with patch("core.weather.fetch_json", side_effect=ProviderError("offline")) as fetch:
            result = get_weather("Austin")
        fetch.assert_called()
        self.assertEqual(result, get_weather_simulated("Austin"))

        with patch.dict(os.environ, {"USE_LIVE_DATA": "false"}):
            self.assertFalse(Settings.from_env().use_live_data)

    def test_live_weather_from_wttr(self):
        with patch("core.weather.fetch_json", return_value=WTTR_PAYLOAD) as fetch:
            result = get_weather("Austin", LIVE)
        self.assertIn("wttr.in/Austin", fetch.call_args[0][0])
        self.assertEqual(result["location"], "Austin, United States of America")
        self.assertEqual(result["temperature"], 71)
        self.assertEqual(result["forecast"][2], {"day": "Day 3", "high": 82, "low": 62,
                                                  "condition": "Clear"})
        self.assertFalse(result["simulated"])

    def test_provider_failure_falls_back_to_simulated(self):
        with patch("core.weather.fetch_json", side_effect=ProviderError("offline")):
            result = get_weather("Austin", LIVE)
        self.assertEqual(result, get_weather_simulated("Austin"))

    def test_malformed_payload_falls_back_to_simulated(self):
        with patch("core.weather.fetch_json", return_value={"unexpected": True}):
            self.assertTrue(get_weather("Austin", LIVE)["simulated"])


class TestStocks(unittest.TestCase):

    def test_simulated_quote_depends_only_on_symbol(self):
        morning = get_stock_simulated("AMZN", now=datetime(2024, 12, 2, 10, 0))
        evening = get_stock_simulated("AMZN", now=datetime(2024, 12, 2, 20, 0))
        self.assertEqual(morning["price"], evening["price"])
        self.assertEqual(morning["marketStatus"], "Open")
        self.assertEqual(evening["marketStatus"], "Closed")
        self.assertEqual(morning["sector"], "E-commerce")
        self.assertRegex(morning["price"], r"^\d+\.\d{2}$")

    def test_symbol_is_normalized_and_required(self):
        self.assertEqual(get_stock_price(" amzn ", OFFLINE)["symbol"], "AMZN")
        with self.assertRaises(ValueError):
            get_stock_price("", OFFLINE)

    def test_live_quote_from_yahoo(self):
        payload = {"chart": {"result": [{"meta": {
            "regularMarketPrice": 110.0, "previousClose": 100.0,
            "regularMarketVolume": 1234567, "marketState": "REGULAR",
        }}]}}
        with patch("core.stocks.fetch_json", return_value=payload):
            result = get_stock_price("AMZN", LIVE)
        self.assertEqual((result["price"], result["change"], result["changePercent"]),
                         ("110.00", "10.00", "10.00"))
        self.assertEqual(result["volume"], "1,234,567")
        self.assertEqual(result["marketStatus"], "Open")
        self.assertEqual(result["source"], "Yahoo Finance (Live)")

    def test_alpha_vantage_is_tried_when_yahoo_fails(self):
        quote = {"Global Quote": {
            "05. price": "101.5", "09. change": "1.5", "10. change percent": "1.5%",
            "06. volume": "1000", "03. high": "102", "04. low": "99",
        }}
        settings = Settings(use_live_data=True, alpha_vantage_api_key="key")
        with patch("core.stocks.fetch_json", side_effect=[ProviderError("blocked"), quote]):
            result = get_stock_price("AMZN", settings)
        self.assertEqual(result["source"], "Alpha Vantage (Live)")
        self.assertEqual(result["changePercent"], "1.5")

    def test_format_market_cap(self):
        self.assertEqual(format_market_cap(2.5e12), "2.5T")
        self.assertEqual(format_market_cap(3.2e9), "3.2B")
        self.assertEqual(format_market_cap(None), "N/A")


class TestFlights(unittest.TestCase):

    def test_known_route(self):
        result = search_flights("sfo", settings=OFFLINE)
        self.assertEqual(result["route"], "SFO-LAS")
        self.assertEqual(len(result["flights"]), 2)
        self.assertTrue(result["simulated"])

    def test_generated_route_is_deterministic(self):
        first = search_flights_simulated("BOS", "LAS")
        self.assertEqual(first, search_flights_simulated("BOS", "LAS"))
        self.assertEqual([f["stops"] for f in first["flights"]][:2], ["Nonstop", "Nonstop"])
        self.assertTrue(first["flights"][2]["stops"].startswith("1 stop"))

    def test_same_origin_and_destination_has_no_flights(self):
        self.assertEqual(search_flights("LAS", "las", settings=OFFLINE)["flights"], [])

    def test_origin_is_required(self):
        with self.assertRaises(ValueError):
            search_flights(" ")

    def test_live_flight_service(self):
        settings = Settings(use_live_data=True, flight_api_url="https://flights.example.com/search")
        flights = [{"airline": "United", "flight": "UA 1"}]
        with patch("core.flights.fetch_json", return_value={"flights": flights}) as fetch:
            result = search_flights("JFK", settings=settings)
        fetch.assert_called_once_with("https://flights.example.com/search",
                                      params={"origin": "JFK", "destination": "LAS"})
        self.assertEqual(result["flights"], flights)
        self.assertFalse(result["simulated"])

        with patch("core.flights.fetch_json", return_value={"oops": []}):
            self.assertTrue(search_flights("JFK", settings=settings)["simulated"])


class TestFetchJson(unittest.TestCase):

    def test_network_errors_become_provider_errors(self):
        with patch("core.http.urllib.request.urlopen", side_effect=urllib.error.URLError("down")):
            with self.assertRaises(ProviderError):
                fetch_json("https://example.com/data", params={"q": "x"})


if __name__ == '__main__':
    unittest.main()
