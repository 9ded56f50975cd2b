import json
import logging

from flask import Blueprint, Response, current_app, jsonify, request

from thankbot.discord_handler import error_response, handle_ping, handle_response
from thankbot.interactions import parse_interaction
from thankbot.store import StoreError
from thankbot.utils import verify_signature

logger = logging.getLogger(__name__)

routes = Blueprint("routes", __name__)


@routes.route("/", methods=["POST"])
def interaction_handler():
    try:
        verify_signature(request, current_app.config["DISCORD_PUBLIC_KEY"])
    except ValueError as e:
        logger.error(f"Verification failed: {e}")
        return Response("Invalid signture", status=401, mimetype="text/plain")

    try:
        interaction = parse_interaction(json.loads(request.get_data()))
    except ValueError as e:
        logger.error(f"Bad interaction payload: {e}")
        return jsonify({"error": "Invalid interaction payload"}), 400

    logger.info(f"Received interaction type={interaction.type} command={interaction.command_name}")

    if interaction.is_ping:
        logger.info("Responding to PING.")
        # Pong is the one reply sent without a JSON content type
        return Response(json.dumps(handle_ping()), mimetype="text/plain")

    store = current_app.extensions["thanks_store"]
    try:
        body = handle_response(interaction, store)
    except StoreError as e:
        logger.error(f"Thanks store unavailable: {e}")
        body = json.dumps(error_response())
    return Response(body, mimetype="application/json")


@routes.route("/healthz", methods=["GET", "HEAD"])
def health_check():
    return "OK", 200
