# mailadmin/handlers.py
# The "controller" layer: Gradio callbacks for the subscriber and template
# tabs. Every fetch handler returns the same five outputs, in this order:
#   dataframe, page_state, page_radio, page_info, status_output
# Failures never escape a handler; they become a gr.Warning and the
# previous outputs are left in place.

import datetime
import json
import logging

import gradio as gr
import pandas as pd
import requests

from . import api_client
from . import state
from .config import config
from .pagination import Page, Pager

logger = logging.getLogger(__name__)

SUBSCRIBER_COLUMNS = {"id": "ID", "name": "Subscriber name", "email": "Email"}
TEMPLATE_COLUMNS = {"id": "ID", "name": "Template name"}

# --- Helpers ---

def error_detail(e: requests.RequestException) -> str:
    """Best-effort human readable reason for a failed request."""
    response = getattr(e, "response", None)
    if response is None:
        return str(e)
    try:
        body = response.json()
    except (json.JSONDecodeError, ValueError):
        return response.text or str(e)
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or body.get("detail") or body)
    return str(body)

def page_to_dataframe(page: Page, columns: dict) -> pd.DataFrame:
    """Projects the rows of a page onto the table columns."""
    headers = list(columns.values())
    if page.is_empty:
        return pd.DataFrame(columns=headers)
    return pd.DataFrame(page.data, columns=list(columns.keys())).rename(columns=columns)

def render_page(page: Page, columns: dict, noun: str) -> tuple:
    """Builds the five fetch outputs for a freshly resolved page."""
    pager = Pager.from_page(page)
    pager_update = gr.update(
        choices=pager.visible_pages(),
        value=pager.page if pager.total else None,
    )
    if page.is_empty:
        msg = f"ℹ️ No {noun} on this page."
    else:
        msg = f"✅ {noun.capitalize()} refreshed at {datetime.datetime.now().strftime('%H:%M:%S')}."
    return page_to_dataframe(page, columns), page, pager_update, pager.label(), msg

def unchanged(current: Page, msg=None) -> tuple:
    """Fetch outputs that leave the table, the stored page and the pager as they were."""
    return gr.update(), current, gr.update(), gr.update(), msg if msg is not None else gr.update()

def load_page(loader, page_number: int) -> Page:
    """
    Calls ``loader(page_number)`` and decodes the result. A request past the
    end (the collection shrank since the page was shown, e.g. after a delete)
    is retried once against the server's last page.
    """
    page = Page.from_response(loader(page_number))
    if page.is_empty and 1 <= page.last_page < page_number:
        page = Page.from_response(loader(page.last_page))
    return page

def fetch(loader, page_number, current: Page, columns: dict, noun: str) -> tuple:
    try:
        page = load_page(loader, max(int(page_number or 1), 1))
    except (requests.RequestException, ValueError) as e:
        logger.error(f"Failed to load {noun} page {page_number}: {e}")
        msg = f"🔴 Could not load {noun}: {error_detail(e)}"
        gr.Warning(msg)
        return unchanged(current, msg)
    return render_page(page, columns, noun)

def parse_list_id(list_id):
    if list_id is None or list_id == "":
        return None
    try:
        return int(list_id)
    except (TypeError, ValueError):
        return None

def subscribers_loader(list_id):
    return lambda page_number: state.LISTS.get_subscribers(list_id, True, config.per_page, page_number)

def templates_loader():
    return lambda page_number: state.TEMPLATES.all(True, config.per_page, page_number)

def show_confirm_row():
    # Hide default row, show confirmation row
    return gr.update(visible=False), gr.update(visible=True)

def hide_confirm_row():
    # Show default row, hide confirmation row
    return gr.update(visible=True), gr.update(visible=False)

# --- Gradio Callback Handlers ---

def check_backend_status():
    """Callback to check API server status on load."""
    return api_client.check_backend(config.ROOT_URL)

# Subscribers tab

def fetch_subscribers(list_id, page_number, current: Page):
    """Fetches one page of subscribers of ``list_id``."""
    list_id = parse_list_id(list_id)
    if list_id is None:
        gr.Warning("Please enter a list ID first!")
        return unchanged(current)
    return fetch(subscribers_loader(list_id), page_number, current, SUBSCRIBER_COLUMNS, "subscribers")

def load_subscribers(list_id, current: Page):
    """Callback for app load and list change: always starts at page 1."""
    return fetch_subscribers(list_id, 1, current)

def refresh_subscribers(list_id, current: Page):
    """Callback for the refresh button: re-fetches the page being shown."""
    return fetch_subscribers(list_id, current.current_page or 1, current)

def on_subscriber_page_select(list_id, page_number, current: Page):
    """Callback for the page buttons of the pagination control."""
    if page_number is None:
        return unchanged(current)
    return fetch_subscribers(list_id, page_number, current)

def previous_subscribers_page(list_id, current: Page):
    if not current.has_previous():
        return unchanged(current)
    return fetch_subscribers(list_id, current.current_page - 1, current)

def next_subscribers_page(list_id, current: Page):
    if not current.has_next():
        return unchanged(current)
    return fetch_subscribers(list_id, current.current_page + 1, current)

def on_select_subscriber(df: pd.DataFrame, evt: gr.SelectData):
    """Callback for when a row is selected in the subscriber dataframe."""
    if df is None or df.empty or evt.index is None:
        return "", ""
    row = df.iloc[evt.index[0]]
    return str(row["ID"]), f"{row['Subscriber name']} <{row['Email']}>"

def ask_confirm_delete_subscriber(subscriber_id: str):
    """
    Called when the user clicks "Delete".
    Hides the default buttons and shows the confirmation row.
    """
    if not subscriber_id or not str(subscriber_id).strip():
        gr.Warning("Please select a subscriber in the table first!")
        return gr.update(), gr.update()
    return show_confirm_row()

def cancel_delete_op():
    """Called when the user clicks "Cancel" in a confirmation row."""
    return hide_confirm_row()

def execute_delete_subscriber(subscriber_id: str, list_id, current: Page):
    """
    Called when the user clicks "Yes, delete it!".
    Outputs: default_row, confirm_row, selected_id, selected_label + the five fetch outputs.
    """
    if not subscriber_id:
        return hide_confirm_row() + (gr.update(), gr.update()) + unchanged(current)

    try:
        state.LISTS.delete_subscriber(subscriber_id.strip())
    except requests.RequestException as e:
        logger.error(f"Failed to delete subscriber {subscriber_id}: {e}")
        gr.Warning("Could not delete the subscriber. Try again.")
        return hide_confirm_row() + (gr.update(), gr.update()) + unchanged(current)

    logger.info(f"Subscriber {subscriber_id} deleted.")
    gr.Info("The subscriber was successfully removed!")
    reloaded = fetch_subscribers(list_id, current.current_page or 1, current)
    return hide_confirm_row() + ("", "") + reloaded

# Templates tab

def fetch_templates(page_number, current: Page):
    """Fetches one page of templates."""
    return fetch(templates_loader(), page_number, current, TEMPLATE_COLUMNS, "templates")

def load_templates(current: Page):
    return fetch_templates(1, current)

def refresh_templates(current: Page):
    return fetch_templates(current.current_page or 1, current)

def on_template_page_select(page_number, current: Page):
    if page_number is None:
        return unchanged(current)
    return fetch_templates(page_number, current)

def previous_templates_page(current: Page):
    if not current.has_previous():
        return unchanged(current)
    return fetch_templates(current.current_page - 1, current)

def next_templates_page(current: Page):
    if not current.has_next():
        return unchanged(current)
    return fetch_templates(current.current_page + 1, current)

def on_select_template(df: pd.DataFrame, evt: gr.SelectData):
    """Callback for a template row selection: loads the full template into the form."""
    if df is None or df.empty or evt.index is None:
        return "", gr.update(), gr.update()
    template_id = str(df.iloc[evt.index[0]]["ID"])
    try:
        template = state.TEMPLATES.get(template_id)
    except requests.RequestException as e:
        logger.error(f"Failed to load template {template_id}: {e}")
        gr.Warning(f"Could not load the template: {error_detail(e)}")
        return template_id, gr.update(), gr.update()
    if not isinstance(template, dict):
        logger.error(f"Unexpected body for template {template_id}: {template!r}")
        gr.Warning("Could not load the template: unexpected response.")
        return template_id, gr.update(), gr.update()
    gr.Info(f"Loaded template: {template.get('name', template_id)}")
    return template_id, template.get("name", ""), template.get("content", "")

def clear_template_form():
    """Callback to clear the template form."""
    return "", "", ""

def handle_create_template(name: str, content: str, current: Page):
    """
    Callback for creating a template.
    Outputs: template_id, name_input, content_input + the five fetch outputs.
    """
    if not name or not name.strip():
        gr.Warning("Please enter a template name!")
        return (gr.update(), gr.update(), gr.update()) + unchanged(current)

    try:
        created = state.TEMPLATES.create({"name": name, "content": content or ""})
    except requests.RequestException as e:
        logger.error(f"Failed to create template {name!r}: {e}")
        gr.Warning(f"Could not create the template: {error_detail(e)}")
        return (gr.update(), gr.update(), gr.update()) + unchanged(current)

    logger.info(f"Template {name!r} created.")
    gr.Info(f"Template '{name}' created!")
    new_id = str(created.get("id", "")) if isinstance(created, dict) else ""
    return (new_id, name, content or "") + fetch_templates(current.current_page or 1, current)

def handle_update_template(template_id: str, name: str, content: str, current: Page):
    """Callback for saving changes to the selected template. Outputs: the five fetch outputs."""
    if not template_id:
        gr.Warning("Please select a template in the table first!")
        return unchanged(current)
    if not name or not name.strip():
        gr.Warning("Please enter a template name!")
        return unchanged(current)

    try:
        state.TEMPLATES.update(template_id, {"name": name, "content": content or ""})
    except requests.RequestException as e:
        logger.error(f"Failed to update template {template_id}: {e}")
        gr.Warning(f"Could not update the template: {error_detail(e)}")
        return unchanged(current)

    gr.Info(f"Template '{name}' saved!")
    return fetch_templates(current.current_page or 1, current)

def ask_confirm_delete_template(template_id: str):
    if not template_id or not str(template_id).strip():
        gr.Warning("Please select a template in the table first!")
        return gr.update(), gr.update()
    return show_confirm_row()

def execute_delete_template(template_id: str, current: Page):
    """
    Called when the user confirms a template deletion.
    Outputs: default_row, confirm_row, template_id, name_input, content_input + the five fetch outputs.
    """
    if not template_id:
        return hide_confirm_row() + (gr.update(), gr.update(), gr.update()) + unchanged(current)

    try:
        state.TEMPLATES.delete(template_id.strip())
    except requests.RequestException as e:
        logger.error(f"Failed to delete template {template_id}: {e}")
        gr.Warning("Could not delete the template. Try again.")
        return hide_confirm_row() + (gr.update(), gr.update(), gr.update()) + unchanged(current)

    logger.info(f"Template {template_id} deleted.")
    gr.Info("The template was successfully removed!")
    reloaded = fetch_templates(current.current_page or 1, current)
    return hide_confirm_row() + ("", "", "") + reloaded
