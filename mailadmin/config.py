# mailadmin/config.py
# Centralizes the console configuration: command-line options override
# environment defaults (optionally loaded from a .env file), and every
# backend endpoint URL is derived from them here.

import argparse
import os

from dotenv import load_dotenv

load_dotenv()


class AppConfig:
    """
    Parses command-line arguments and constructs all necessary API endpoint URLs.
    """
    def __init__(self, argv=None):
        parser = argparse.ArgumentParser(description="Mailing list admin console")
        parser.add_argument(
            "--port",
            type=int,
            default=int(os.getenv("MAILADMIN_PORT", 10101)),
            help="Port to run the admin console on (default: 10101)"
        )
        parser.add_argument(
            "--bnport",
            type=int,
            default=int(os.getenv("MAILADMIN_BACKEND_PORT", 8000)),
            help="Port of the mailing list API server (default: 8000)"
        )
        parser.add_argument(
            "--bnserver",
            type=str,
            default=os.getenv("MAILADMIN_BACKEND", "http://127.0.0.1"),
            help="Mailing list API server address (default: http://127.0.0.1)"
        )
        parser.add_argument(
            "--list-id",
            type=int,
            default=int(os.getenv("MAILADMIN_LIST_ID", 1)),
            help="List whose subscribers are shown on startup (default: 1)"
        )
        parser.add_argument(
            "--per-page",
            type=int,
            default=int(os.getenv("MAILADMIN_PER_PAGE", 10)),
            help="Rows per page in the subscriber and template tables (default: 10)"
        )
        parser.add_argument(
            "--timeout",
            type=float,
            default=float(os.getenv("MAILADMIN_TIMEOUT", 10)),
            help="Timeout in seconds for each API request (default: 10)"
        )
        parser.add_argument(
            "--log-dir",
            type=str,
            default=os.getenv("MAILADMIN_LOG_DIR", "logs"),
            help="Directory for the rotating log file (default: logs)"
        )

        # parse_known_args lets Gradio's reload mode pass its own arguments through
        args, _ = parser.parse_known_args(argv)

        self.run_port = args.port
        self.default_list_id = args.list_id
        self.per_page = args.per_page
        self.timeout = args.timeout
        self.log_dir = args.log_dir

        backend_base_url = f"{args.bnserver.rstrip('/')}:{args.bnport}"

        # --- API Endpoints ---
        self.ROOT_URL = backend_base_url
        self.API_BASE_URL = f"{backend_base_url}/api"


# Create a single, globally accessible configuration instance.
config = AppConfig()
