import gradio as gr

from mailadmin.main import build_demo


def test_build_demo_wires_both_tabs():
    demo = build_demo()
    assert isinstance(demo, gr.Blocks)
    fns = demo.fns.values() if isinstance(demo.fns, dict) else demo.fns
    wired = {getattr(block_fn.fn, "__name__", None) for block_fn in fns}
    assert {"load_subscribers", "load_templates", "execute_delete_subscriber", "execute_delete_template"} <= wired
