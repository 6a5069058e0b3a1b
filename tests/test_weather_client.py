"""
Unit tests for the weather gateway client.

HTTP is mocked; tests cover request shape, error classification and
response parsing.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from agrar.api.weather_client import (
    fetch_weather,
    fetch_weather_raw,
    parse_gateway_response,
)
from agrar.core.exceptions import GatewayError, MalformedResponseError, TransportError


def mock_response(status_code=200, json_data=None, text=""):
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    if isinstance(json_data, Exception):
        resp.json.side_effect = json_data
    else:
        resp.json.return_value = json_data
    return resp


class TestFetchWeatherRaw:
    """Request building and transport errors."""

    @patch("agrar.api.weather_client.requests.get")
    def test_success(self, mock_get, gateway_response):
        mock_get.return_value = mock_response(json_data=gateway_response)

        data = fetch_weather_raw("Berlin, Germany", days=3, api_key="abc")

        assert data == gateway_response
        mock_get.assert_called_once()
        url = mock_get.call_args[0][0]
        params = mock_get.call_args[1]["params"]
        assert url == "https://api.weatherapi.com/v1/forecast.json"
        assert params["q"] == "Berlin, Germany"
        assert params["days"] == 3
        assert params["key"] == "abc"
        assert mock_get.call_args[1]["timeout"] == 10

    @patch("agrar.api.weather_client.requests.get")
    def test_http_error_status(self, mock_get):
        mock_get.return_value = mock_response(
            status_code=400,
            json_data={"error": {"code": 1006, "message": "No matching location found."}},
        )

        with pytest.raises(TransportError) as excinfo:
            fetch_weather_raw("Nowhere", api_key="abc")

        assert excinfo.value.status_code == 400
        assert "No matching location found." in str(excinfo.value)

    @patch("agrar.api.weather_client.requests.get")
    def test_server_error_without_body(self, mock_get):
        mock_get.return_value = mock_response(status_code=502, json_data=ValueError("no json"))

        with pytest.raises(TransportError) as excinfo:
            fetch_weather_raw("Berlin", api_key="abc")
        assert str(excinfo.value) == "Weather service answered 502"

    @patch("agrar.api.weather_client.requests.get")
    def test_network_failure(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("down")

        with pytest.raises(TransportError):
            fetch_weather_raw("Berlin", api_key="abc")

    @patch("agrar.api.weather_client.requests.get")
    def test_non_json_body_is_malformed(self, mock_get):
        mock_get.return_value = mock_response(json_data=ValueError("bad"), text="<html>")

        with pytest.raises(MalformedResponseError):
            fetch_weather_raw("Berlin", api_key="abc")

    @patch("agrar.api.weather_client.requests.get")
    def test_deeply_nested_body_is_malformed(self, mock_get):
        mock_get.return_value = mock_response(
            json_data=RecursionError("maximum recursion depth exceeded"), text="[" * 100
        )

        with pytest.raises(MalformedResponseError):
            fetch_weather_raw("Berlin", api_key="abc")

    @patch("agrar.api.weather_client.get_secret", return_value=None)
    @patch("agrar.api.weather_client.requests.get")
    def test_missing_api_key(self, mock_get, mock_secret):
        with pytest.raises(TransportError):
            fetch_weather_raw("Berlin")
        mock_get.assert_not_called()

    def test_uses_given_session(self, gateway_response):
        session = MagicMock()
        session.get.return_value = mock_response(json_data=gateway_response)

        fetch_weather_raw("Berlin", api_key="abc", session=session)
        session.get.assert_called_once()


class TestParseGatewayResponse:
    """Reshaping and malformed detection."""

    def test_parses_current_and_forecast(self, gateway_response):
        payload = parse_gateway_response(gateway_response)
        assert payload.location.name == "Berlin"
        assert payload.location.country == "Germany"
        assert payload.current.temperature_c == 24.0
        assert payload.current.humidity_percent == 55
        assert payload.current.precipitation_mm == 1.0
        assert payload.current.wind_kph == pytest.approx(12.2)
        assert payload.current.condition_text == "Sunny"
        assert payload.current.uv_index == 6.0
        assert len(payload.forecast) == 3
        assert payload.forecast[2].total_precip_mm == pytest.approx(9.8)

    def test_forecast_is_optional(self, gateway_response_no_forecast):
        assert parse_gateway_response(gateway_response_no_forecast).forecast is None

    @pytest.mark.parametrize("section", ["current", "location"])
    def test_missing_section(self, gateway_response, section):
        del gateway_response[section]
        with pytest.raises(MalformedResponseError) as excinfo:
            parse_gateway_response(gateway_response)
        assert section in str(excinfo.value)
        assert excinfo.value.raw_payload is gateway_response

    def test_missing_required_field(self, gateway_response):
        del gateway_response["current"]["temp_c"]
        with pytest.raises(MalformedResponseError):
            parse_gateway_response(gateway_response)

    def test_min_above_max_is_malformed(self, gateway_response):
        gateway_response["forecast"]["forecastday"][0]["day"]["mintemp_c"] = 40
        with pytest.raises(MalformedResponseError):
            parse_gateway_response(gateway_response)

    @pytest.mark.parametrize(
        "path",
        [
            ("current", "temp_c"),
            ("current", "precip_mm"),
            ("forecast", "daily_chance_of_rain"),
            ("forecast", "totalprecip_mm"),
        ],
    )
    @pytest.mark.parametrize("bad_value", [float("inf"), float("nan")])
    def test_non_finite_number_is_malformed(self, gateway_response, path, bad_value):
        section, field = path
        if section == "current":
            gateway_response["current"][field] = bad_value
        else:
            gateway_response["forecast"]["forecastday"][1]["day"][field] = bad_value
        with pytest.raises(MalformedResponseError):
            parse_gateway_response(gateway_response)

    def test_not_an_object(self):
        with pytest.raises(MalformedResponseError):
            parse_gateway_response(["nope"])

    def test_malformed_is_gateway_error(self):
        assert issubclass(MalformedResponseError, GatewayError)
        assert issubclass(TransportError, GatewayError)


class TestFetchWeather:
    @patch("agrar.api.weather_client.requests.get")
    def test_returns_payload(self, mock_get, gateway_response):
        mock_get.return_value = mock_response(json_data=gateway_response)
        payload = fetch_weather("Berlin, Germany", api_key="abc")
        assert payload.location.name == "Berlin"

    @patch("agrar.api.weather_client.requests.get")
    def test_missing_current_raises(self, mock_get, gateway_response):
        del gateway_response["current"]
        mock_get.return_value = mock_response(json_data=gateway_response)
        with pytest.raises(MalformedResponseError):
            fetch_weather("Berlin, Germany", api_key="abc")
