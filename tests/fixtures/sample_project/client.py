"""Tiny HTTP client.

Nothing below is a real import:
import flask
from django import http
"""

import json
from urllib.parse import urlencode

import requests
from requests.adapters import HTTPAdapter

BASE_URL = "https://api.example.com/forecast"
HINT = 'from pandas import DataFrame'


class WeatherClient:
    def __init__(self, session=None):
        self.session = session or requests.Session()
        self.session.mount("https://", HTTPAdapter(max_retries=2))

    def forecast(self, city):
        url = f"{BASE_URL}?{urlencode({'q': city})}"
        return json.loads(self.session.get(url, timeout=5).text)
