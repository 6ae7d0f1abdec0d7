# mailadmin: Gradio admin console for mailing list subscribers and message templates.

__version__ = "0.1.0"
