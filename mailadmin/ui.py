# mailadmin/ui.py
# Layout only. Each builder returns a dict of the components main.py wires up.

import gradio as gr

from .config import config
from .handlers import SUBSCRIBER_COLUMNS, TEMPLATE_COLUMNS
from .pagination import Page


def create_pager():
    """Builds the page-button control: previous, the visible page numbers, next."""
    with gr.Row():
        prev_btn = gr.Button("«", size="sm", scale=0, min_width=60)
        page_radio = gr.Radio(choices=[], label="Page", show_label=False, interactive=True, scale=4)
        next_btn = gr.Button("»", size="sm", scale=0, min_width=60)
    page_info = gr.Markdown()
    return {"prev_btn": prev_btn, "page_radio": page_radio, "next_btn": next_btn, "page_info": page_info}


def create_confirm_rows(action_label: str, warning_text: str, confirm_label: str):
    """Default action row plus the hidden confirmation row that replaces it."""
    with gr.Row(visible=True) as default_action_row:
        action_btn = gr.Button(action_label, variant="stop")
    with gr.Group(visible=False) as confirm_action_row:
        gr.Markdown(f"### ⚠️ Are you sure?\n{warning_text}")
        with gr.Row():
            confirm_yes_btn = gr.Button(confirm_label, variant="stop")
            confirm_no_btn = gr.Button("Cancel")
    return {
        "default_action_row": default_action_row, "action_btn": action_btn,
        "confirm_action_row": confirm_action_row,
        "confirm_yes_btn": confirm_yes_btn, "confirm_no_btn": confirm_no_btn,
    }


def create_subscribers_tab():
    """Builds the UI for the 'Subscribers' tab."""
    with gr.TabItem("Subscribers", id="subscribers_tab") as tab:
        gr.Markdown("## Subscribers")
        with gr.Row():
            list_id_input = gr.Number(label="List ID", value=config.default_list_id, precision=0, scale=1)
            refresh_btn = gr.Button("🔄 Refresh", variant="secondary", scale=0)
        status_output = gr.Markdown()
        page_state = gr.State(Page())
        dataframe = gr.DataFrame(
            headers=list(SUBSCRIBER_COLUMNS.values()),
            interactive=False,
            row_count=(config.per_page, "dynamic"),
        )
        pager = create_pager()

        with gr.Group():
            gr.Markdown("### Delete subscriber")
            gr.Markdown("**Click** a row in the table above to select it.")
            with gr.Row():
                selected_id = gr.Textbox(label="Subscriber ID", interactive=False)
                selected_label = gr.Textbox(label="Subscriber", interactive=False)
            confirm = create_confirm_rows(
                "🗑️ Delete", "You will not be able to recover this subscriber!", "Yes, delete it!"
            )

    components = {
        "tab": tab, "list_id_input": list_id_input, "refresh_btn": refresh_btn,
        "status_output": status_output, "page_state": page_state, "dataframe": dataframe,
        "selected_id": selected_id, "selected_label": selected_label,
    }
    components.update(pager)
    components.update(confirm)
    return components


def create_templates_tab():
    """Builds the UI for the 'Templates' tab."""
    with gr.TabItem("Templates", id="templates_tab") as tab:
        gr.Markdown("## Message templates")
        with gr.Row():
            refresh_btn = gr.Button("🔄 Refresh", variant="secondary", scale=0)
        status_output = gr.Markdown()
        page_state = gr.State(Page())

        with gr.Row():
            with gr.Column(scale=2):
                dataframe = gr.DataFrame(
                    headers=list(TEMPLATE_COLUMNS.values()),
                    interactive=False,
                    row_count=(config.per_page, "dynamic"),
                )
                pager = create_pager()

            with gr.Column(scale=3):
                with gr.Group():
                    gr.Markdown("### ✨ New template / edit selected template")
                    template_id = gr.Textbox(label="Template ID", interactive=False)
                    name_input = gr.Textbox(label="Name", placeholder="e.g. Welcome")
                    content_input = gr.Textbox(label="Content", lines=10, placeholder="Hi {{name}}, ...")
                    with gr.Row():
                        create_btn = gr.Button("➕ Create", variant="primary")
                        update_btn = gr.Button("💾 Save changes")
                        clear_btn = gr.Button("📋 Clear form")
                confirm = create_confirm_rows(
                    "🗑️ Delete template", "You will not be able to recover this template!", "Yes, delete it!"
                )

    components = {
        "tab": tab, "refresh_btn": refresh_btn, "status_output": status_output,
        "page_state": page_state, "dataframe": dataframe,
        "template_id": template_id, "name_input": name_input, "content_input": content_input,
        "create_btn": create_btn, "update_btn": update_btn, "clear_btn": clear_btn,
    }
    components.update(pager)
    components.update(confirm)
    return components
