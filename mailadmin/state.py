# mailadmin/state.py
# Process-wide objects shared by every browser session: the entity clients.
# Per-session data (the Page currently shown) lives in gr.State, not here.

import requests

from .api_client import ListClient, TemplateClient
from .config import config

# One connection pool for both clients.
SESSION = requests.Session()

LISTS = ListClient(config.API_BASE_URL, session=SESSION, timeout=config.timeout)

TEMPLATES = TemplateClient(config.API_BASE_URL, session=SESSION, timeout=config.timeout)
