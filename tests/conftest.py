from typing import Dict, Optional
from unittest.mock import Mock

import pytest
import requests

from client import BookCatalogClient
from controller import Controller
from scheduler import Scheduler
from storage import SessionStore


class DictStorage:
    """In-memory stand-in for the browser cookie jar."""

    def __init__(self, initial: Optional[Dict[str, object]] = None):
        self.data = dict(initial or {})

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value

    def delete(self, key):
        self.data.pop(key, None)


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


def make_response(status: int = 200, json_body=None, text: str = "", url: str = "http://api.test/"):
    resp = Mock(spec=requests.Response)
    resp.status_code = status
    resp.ok = status < 400
    resp.text = text
    resp.url = url
    if json_body is None:
        resp.json.side_effect = ValueError("No JSON body")
    else:
        resp.json.return_value = json_body
    return resp


@pytest.fixture
def storage():
    return DictStorage()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler(clock):
    return Scheduler(clock=clock)


@pytest.fixture
def client():
    fake = Mock(spec=BookCatalogClient)
    fake.search_books.return_value = []
    fake.books_by_genre.return_value = []
    fake.top_recommendations.return_value = []
    fake.signup.return_value = ""
    fake.login.return_value = "T1"
    return fake


@pytest.fixture
def controller(client, storage, scheduler):
    return Controller(client, SessionStore(storage), scheduler)


@pytest.fixture
def logged_in(controller):
    controller.submit_login("a@b.com", "x")
    controller.client.reset_mock()
    return controller
