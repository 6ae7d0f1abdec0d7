import json
import math
import re
from urllib.parse import parse_qs, urlsplit

import gradio as gr
import pytest
import requests

from mailadmin import state
from mailadmin.config import config
from mailadmin.api_client import ListClient, TemplateClient

BASE_URL = "http://api.test/api"


def make_response(request, status, body=None):
    response = requests.Response()
    response.status_code = status
    response._content = b"" if body is None else json.dumps(body).encode("utf-8")
    response.headers["Content-Type"] = "application/json"
    response.url = request.url
    response.request = request
    return response


def paginate(items, query):
    per_page = int(query.get("per_page", ["10"])[0])
    page = int(query.get("page", ["1"])[0])
    last_page = max(math.ceil(len(items) / per_page), 1)
    start = (page - 1) * per_page
    return {"data": items[start:start + per_page], "current_page": page, "last_page": last_page}


class FakeApiSession(requests.Session):
    """A requests session answering from an in-memory mailing list API."""

    def __init__(self):
        super().__init__()
        self.lists = {}
        self.templates = {}
        self.sent = []
        self.broken = False

    def add_subscribers(self, list_id, count):
        self.lists[list_id] = [
            {"id": i, "name": f"Subscriber {i}", "email": f"sub{i}@example.com"} for i in range(1, count + 1)
        ]

    def add_template(self, name, content):
        template_id = max(self.templates, default=0) + 1
        self.templates[template_id] = {"id": template_id, "name": name, "content": content}
        return template_id

    def send(self, request, **kwargs):
        self.sent.append(request)
        if self.broken:
            raise requests.ConnectionError("connection refused")

        url = urlsplit(request.url)
        path = url.path
        query = parse_qs(url.query)
        method = request.method

        match = re.fullmatch(r"/api/lists/(\d+)/subscribers", path)
        if match and method == "GET":
            items = self.lists.get(int(match.group(1)))
            if items is None:
                return make_response(request, 404, {"message": "List not found"})
            return make_response(request, 200, paginate(items, query))

        match = re.fullmatch(r"/api/subscribers/(\d+)", path)
        if match and method == "DELETE":
            sid = int(match.group(1))
            for items in self.lists.values():
                for item in items:
                    if item["id"] == sid:
                        items.remove(item)
                        return make_response(request, 200, {"message": "Subscriber deleted"})
            return make_response(request, 404, {"message": "Subscriber not found"})

        if path == "/api/templates":
            if method == "GET":
                return make_response(request, 200, paginate(sorted(self.templates.values(), key=lambda t: t["id"]), query))
            if method == "POST":
                body = json.loads(request.body)
                template_id = self.add_template(body["name"], body["content"])
                return make_response(request, 201, self.templates[template_id])

        match = re.fullmatch(r"/api/templates/(\d+)", path)
        if match:
            template_id = int(match.group(1))
            if template_id not in self.templates:
                return make_response(request, 404, {"message": "Template not found"})
            if method == "GET":
                return make_response(request, 200, self.templates[template_id])
            if method == "DELETE":
                del self.templates[template_id]
                return make_response(request, 204)
            if method == "PUT":
                body = json.loads(request.body)
                self.templates[template_id].update(body)
                return make_response(request, 200, self.templates[template_id])

        return make_response(request, 405, {"message": "Method not allowed"})


@pytest.fixture
def api():
    session = FakeApiSession()
    session.add_subscribers(1, 23)
    session.add_template("Welcome", "Hi")
    session.add_template("Goodbye", "Bye")
    return session


@pytest.fixture
def list_client(api):
    return ListClient(BASE_URL, session=api, timeout=1)


@pytest.fixture
def template_client(api):
    return TemplateClient(BASE_URL, session=api, timeout=1)


@pytest.fixture
def clients(monkeypatch, list_client, template_client):
    """Points the shared clients used by the handlers at the fake API."""
    monkeypatch.setattr(state, "LISTS", list_client)
    monkeypatch.setattr(state, "TEMPLATES", template_client)
    monkeypatch.setattr(config, "per_page", 10)
    return list_client, template_client


@pytest.fixture
def notifications(monkeypatch):
    """Captures gr.Info / gr.Warning calls as (level, message) tuples."""
    calls = []
    monkeypatch.setattr(gr, "Info", lambda message, *args, **kwargs: calls.append(("info", message)))
    monkeypatch.setattr(gr, "Warning", lambda message, *args, **kwargs: calls.append(("warning", message)))
    return calls
