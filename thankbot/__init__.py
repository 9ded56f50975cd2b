import logging

from flask import Flask

import config
from thankbot.routes import routes
from thankbot.store import MemoryThanksStore, RedisThanksStore


def configure_logging(level=None):
    logging.basicConfig(
        level=level or config.LOG_LEVEL,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()]
    )


def create_app(store=None, public_key=None):
    """
    Builds the interactions app.

    Args:
        store: Thanks counter store. Defaults to Redis when REDIS_URL is set,
            otherwise an in-memory store.
        public_key (str): Hex-encoded Ed25519 application public key.
            Defaults to DISCORD_PUBLIC_KEY.

    Returns:
        Flask: The configured application.
    """
    configure_logging()

    if store is None:
        if config.REDIS_URL:
            store = RedisThanksStore.from_url(config.REDIS_URL, namespace=config.THANKS_NAMESPACE)
        else:
            logging.warning("REDIS_URL is not set, thanks will only be kept in memory.")
            store = MemoryThanksStore()

    app = Flask(__name__)
    app.config["DISCORD_PUBLIC_KEY"] = public_key if public_key is not None else config.DISCORD_PUBLIC_KEY
    app.extensions["thanks_store"] = store
    app.register_blueprint(routes)
    return app
