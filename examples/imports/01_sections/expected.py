"""Fetch remote data."""

from __future__ import annotations

import json
import sys

import requests

from .cache import lookup


def fetch(url):
    return lookup(url) or json.loads(requests.get(url).text)
