# run.py
# Entry point for running the admin console from a source checkout
# without installing it: `python run.py --bnserver http://api.example --bnport 80`.

import sys
import os


def main():
    """Puts the repository root on the Python path and runs the admin console."""
    project_root = os.path.dirname(os.path.abspath(__file__))
    sys.path.insert(0, project_root)

    print("Initializing admin console...")

    from mailadmin.main import main as run_admin_console
    run_admin_console()


if __name__ == "__main__":
    main()
