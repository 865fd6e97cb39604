# qstatelab/cli.py
from qstatelab.__main__ import app as _typer_app
from qstatelab.logging_config import setup_logging


def main():
    """Console script entrypoint for the qstatelab CLI."""
    setup_logging()
    _typer_app()
