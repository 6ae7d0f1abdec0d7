# mailadmin/main.py
# Assembles the UI and wires the event handlers.

import logging
import os

import gradio as gr

from .config import config
from .logging_config import setup_logging
from . import handlers
from . import ui


def fetch_outputs(tab_ui):
    """The five outputs every fetch handler returns, in handler order."""
    return [
        tab_ui["dataframe"], tab_ui["page_state"], tab_ui["page_radio"],
        tab_ui["page_info"], tab_ui["status_output"],
    ]


def confirm_row_outputs(tab_ui):
    return [tab_ui["default_action_row"], tab_ui["confirm_action_row"]]


def build_demo():
    """Builds the Blocks app with all events wired."""
    with gr.Blocks(theme=gr.themes.Soft(primary_hue="green", secondary_hue="lime"), title="Mailing list admin") as demo:
        # --- 1. Global Components ---
        backend_status = gr.Markdown()
        gr.Markdown("# Mailing list admin")

        # --- 2. Build UI from Tabs ---
        with gr.Tabs():
            sub_ui = ui.create_subscribers_tab()
            tpl_ui = ui.create_templates_tab()

        # --- 3. Wire Event Handlers ---
        demo.load(handlers.check_backend_status, outputs=backend_status)

        # Subscribers tab
        sub_outputs = fetch_outputs(sub_ui)
        demo.load(handlers.load_subscribers, inputs=[sub_ui["list_id_input"], sub_ui["page_state"]], outputs=sub_outputs)
        sub_ui["list_id_input"].submit(handlers.load_subscribers, inputs=[sub_ui["list_id_input"], sub_ui["page_state"]], outputs=sub_outputs)
        sub_ui["refresh_btn"].click(handlers.refresh_subscribers, inputs=[sub_ui["list_id_input"], sub_ui["page_state"]], outputs=sub_outputs)

        # Page changes: .input fires only for user selections, not for the pager updates handlers return
        sub_ui["page_radio"].input(
            handlers.on_subscriber_page_select,
            inputs=[sub_ui["list_id_input"], sub_ui["page_radio"], sub_ui["page_state"]],
            outputs=sub_outputs
        )
        sub_ui["prev_btn"].click(handlers.previous_subscribers_page, inputs=[sub_ui["list_id_input"], sub_ui["page_state"]], outputs=sub_outputs)
        sub_ui["next_btn"].click(handlers.next_subscribers_page, inputs=[sub_ui["list_id_input"], sub_ui["page_state"]], outputs=sub_outputs)

        sub_ui["dataframe"].select(
            handlers.on_select_subscriber,
            inputs=[sub_ui["dataframe"]],
            outputs=[sub_ui["selected_id"], sub_ui["selected_label"]],
            trigger_mode='once'
        )

        # 1. Click Delete -> show confirmation
        sub_ui["action_btn"].click(handlers.ask_confirm_delete_subscriber, inputs=[sub_ui["selected_id"]], outputs=confirm_row_outputs(sub_ui))
        # 2. Click Yes -> delete -> reload the page being shown
        sub_ui["confirm_yes_btn"].click(
            handlers.execute_delete_subscriber,
            inputs=[sub_ui["selected_id"], sub_ui["list_id_input"], sub_ui["page_state"]],
            outputs=confirm_row_outputs(sub_ui) + [sub_ui["selected_id"], sub_ui["selected_label"]] + sub_outputs
        )
        # 3. Click Cancel -> restore
        sub_ui["confirm_no_btn"].click(handlers.cancel_delete_op, outputs=confirm_row_outputs(sub_ui))

        # Templates tab
        tpl_outputs = fetch_outputs(tpl_ui)
        demo.load(handlers.load_templates, inputs=[tpl_ui["page_state"]], outputs=tpl_outputs)
        tpl_form = [tpl_ui["template_id"], tpl_ui["name_input"], tpl_ui["content_input"]]
        tpl_ui["tab"].select(handlers.refresh_templates, inputs=[tpl_ui["page_state"]], outputs=tpl_outputs)
        tpl_ui["refresh_btn"].click(handlers.refresh_templates, inputs=[tpl_ui["page_state"]], outputs=tpl_outputs)
        tpl_ui["page_radio"].input(
            handlers.on_template_page_select,
            inputs=[tpl_ui["page_radio"], tpl_ui["page_state"]],
            outputs=tpl_outputs
        )
        tpl_ui["prev_btn"].click(handlers.previous_templates_page, inputs=[tpl_ui["page_state"]], outputs=tpl_outputs)
        tpl_ui["next_btn"].click(handlers.next_templates_page, inputs=[tpl_ui["page_state"]], outputs=tpl_outputs)

        tpl_ui["dataframe"].select(handlers.on_select_template, inputs=[tpl_ui["dataframe"]], outputs=tpl_form, trigger_mode='once')
        tpl_ui["clear_btn"].click(handlers.clear_template_form, outputs=tpl_form)
        tpl_ui["create_btn"].click(
            handlers.handle_create_template,
            inputs=[tpl_ui["name_input"], tpl_ui["content_input"], tpl_ui["page_state"]],
            outputs=tpl_form + tpl_outputs
        )
        tpl_ui["update_btn"].click(
            handlers.handle_update_template,
            inputs=tpl_form + [tpl_ui["page_state"]],
            outputs=tpl_outputs
        )

        tpl_ui["action_btn"].click(handlers.ask_confirm_delete_template, inputs=[tpl_ui["template_id"]], outputs=confirm_row_outputs(tpl_ui))
        tpl_ui["confirm_yes_btn"].click(
            handlers.execute_delete_template,
            inputs=[tpl_ui["template_id"], tpl_ui["page_state"]],
            outputs=confirm_row_outputs(tpl_ui) + tpl_form + tpl_outputs
        )
        tpl_ui["confirm_no_btn"].click(handlers.cancel_delete_op, outputs=confirm_row_outputs(tpl_ui))

    return demo


def main():
    """
    Builds the Gradio UI, wires up all the event handlers, and launches the interface.
    """
    os.environ["GRADIO_ANALYTICS_ENABLED"] = "false"
    setup_logging(config.log_dir)
    logger = logging.getLogger(__name__)
    logger.info(f"Using mailing list API at {config.API_BASE_URL}")

    demo = build_demo()

    # --- 4. Launch the App ---
    logger.info(f"Admin console starting on port {config.run_port} ...")
    demo.launch(server_name="0.0.0.0", server_port=config.run_port, inbrowser=False)


if __name__ == "__main__":
    main()
