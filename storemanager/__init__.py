import logging

import click
from flask import Flask

from storemanager.config import Config
from storemanager.db import Store
from storemanager.helpers import UserHelper
from storemanager.main import api, pages
from storemanager.responses import register_error_handlers


def create_app(config=None):
    """Build the Flask app.

    ``config`` is an optional mapping applied over the environment settings;
    the store is created here and shared by every request through
    ``app.extensions["store"]``.
    """
    app = Flask(__name__)
    app.config.from_object(Config())
    if config:
        app.config.update(config)
    if not app.config["JWT_KEY"] and not app.config["TESTING"]:
        raise RuntimeError("JWT_KEY is not set; tokens cannot be signed without it.")

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.logger.setLevel(app.config["LOG_LEVEL"])

    store = Store(app.config["DATABASE_URL"])
    store.create_all()
    app.extensions["store"] = store

    app.register_blueprint(api)
    app.register_blueprint(pages)
    register_error_handlers(app)

    @app.cli.command("init-db")
    def init_db():
        """Create the tables and seed the Owner account."""
        store.create_all()
        password = app.config["OWNER_PASSWORD"]
        if not password:
            click.echo("OWNER_PASSWORD is not set; skipping Owner account.")
            return
        owner = UserHelper(store).create_owner(app.config["OWNER_NAME"], app.config["OWNER_EMAIL"], password)
        click.echo(f"Owner account: {owner['email']}" if owner else "Owner account already exists.")

    return app
