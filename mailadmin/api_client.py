# mailadmin/api_client.py
# The service layer: every HTTP request to the mailing list API is built and
# sent here. Each entity client covers one resource type. Failures propagate
# as requests.RequestException; callers decide how to surface them.

import logging
from urllib.parse import quote

import requests

from .config import config

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Accept": "application/json"}


def check_backend(root_url: str = None, timeout: float = 2) -> str:
    """Checks the API server status."""
    try:
        response = requests.get(root_url or config.ROOT_URL, timeout=timeout)
        if response.status_code == 200:
            return "🟢 API server is up"
        return f"🟡 API server responded with status {response.status_code}"
    except requests.RequestException:
        return "🔴 API server unreachable"


def _flag(value) -> str:
    # The API expects lowercase booleans in query strings
    return "true" if value else "false"


def _page_params(paginate, per_page, page) -> dict:
    return {"paginate": _flag(paginate), "per_page": per_page, "page": page}


def decode(response: requests.Response):
    """Returns the decoded JSON body, or None when the server sent no body."""
    if not response.content:
        return None
    return response.json()


class EntityClient:
    """
    Base for the entity clients. Holds only the base URL and the transport
    session; every method builds a fresh request.
    """

    def __init__(self, base_url: str = None, session: requests.Session = None, timeout: float = None):
        self.base_url = (base_url or config.API_BASE_URL).rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = config.timeout if timeout is None else timeout

    def url(self, *parts) -> str:
        return "/".join([self.base_url] + [quote(str(part), safe="") for part in parts])

    def send(self, request: requests.Request):
        """Sends a built request and returns the decoded response body."""
        prepared = self.session.prepare_request(request)
        logger.debug(f"{prepared.method} {prepared.url}")
        response = self.session.send(prepared, timeout=self.timeout)
        try:
            response.raise_for_status()
        except requests.HTTPError:
            logger.warning(f"{prepared.method} {prepared.url} failed with status {response.status_code}")
            raise
        return decode(response)


class ListClient(EntityClient):
    """Mailing lists and the subscribers attached to them."""

    def build_get_subscribers(self, list_id, paginate=True, per_page=10, page=1) -> requests.Request:
        return requests.Request(
            "GET",
            self.url("lists", list_id, "subscribers"),
            params=_page_params(paginate, per_page, page),
            headers=JSON_HEADERS,
        )

    def get_subscribers(self, list_id, paginate=True, per_page=10, page=1):
        """Fetches one page of the subscribers of ``list_id``."""
        return self.send(self.build_get_subscribers(list_id, paginate, per_page, page))

    def build_delete_subscriber(self, sid) -> requests.Request:
        return requests.Request("DELETE", self.url("subscribers", sid), headers=JSON_HEADERS)

    def delete_subscriber(self, sid):
        """Deletes a subscriber by id."""
        return self.send(self.build_delete_subscriber(sid))


class TemplateClient(EntityClient):
    """Message templates. Responses are passed through undecorated."""

    def build_all(self, paginate=True, per_page=10, page=1) -> requests.Request:
        return requests.Request(
            "GET", self.url("templates"), params=_page_params(paginate, per_page, page), headers=JSON_HEADERS
        )

    def all(self, paginate=True, per_page=10, page=1):
        return self.send(self.build_all(paginate, per_page, page))

    def build_get(self, template_id) -> requests.Request:
        return requests.Request("GET", self.url("templates", template_id), headers=JSON_HEADERS)

    def get(self, template_id):
        return self.send(self.build_get(template_id))

    def build_delete(self, template_id) -> requests.Request:
        return requests.Request("DELETE", self.url("templates", template_id), headers=JSON_HEADERS)

    def delete(self, template_id):
        return self.send(self.build_delete(template_id))

    def build_create(self, data: dict) -> requests.Request:
        # Only name and content are sent, whatever else the caller's dict holds
        payload = {"name": data.get("name"), "content": data.get("content")}
        return requests.Request("POST", self.url("templates"), json=payload, headers=JSON_HEADERS)

    def create(self, data: dict):
        return self.send(self.build_create(data))

    def build_update(self, template_id, data: dict) -> requests.Request:
        payload = {"name": data.get("name"), "content": data.get("content")}
        return requests.Request("PUT", self.url("templates", template_id), json=payload, headers=JSON_HEADERS)

    def update(self, template_id, data: dict):
        return self.send(self.build_update(template_id, data))
