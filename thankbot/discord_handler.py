import json
import logging

from thankbot.interactions import EPHEMERAL, InteractionResponseType
from thankbot.store import check_my_thanks, increment_thanked_user

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Something went wrong. Please try again."
THANK_COMMANDS = ("Thank", "thank")
MY_THANKS_COMMAND = "my_thanks"


def handle_ping():
    """
    Responds to Discord's PING request.
    """
    return {"type": InteractionResponseType.PONG}


def message_response(content, ephemeral=False):
    data = {"content": content}
    if ephemeral:
        data["flags"] = EPHEMERAL
    return {"type": InteractionResponseType.CHANNEL_MESSAGE_WITH_SOURCE, "data": data}


def error_response():
    return message_response(GENERIC_ERROR, ephemeral=True)


def handle_response(interaction, store):
    """
    Routes an interaction to its command handler.

    Args:
        interaction (Interaction): The parsed interaction.
        store (ThanksStore): The thanks store.

    Returns:
        str: The serialized interaction response.
    """
    if interaction.is_ping:
        response = handle_ping()
    elif interaction.is_command and interaction.command_name in THANK_COMMANDS:
        response = handle_thank_user(interaction, store)
    elif interaction.is_command and interaction.command_name == MY_THANKS_COMMAND:
        response = handle_check_my_thanks(interaction, store)
    else:
        # Didn't catch a command
        logger.warning(f"Unhandled interaction type={interaction.type} command={interaction.command_name}")
        response = error_response()
    return json.dumps(response)


def handle_thank_user(interaction, store):
    """
    Handles the Thank command from a slash command or a user/message context menu.

    Args:
        interaction (Interaction): The parsed interaction.
        store (ThanksStore): The thanks store.

    Returns:
        dict: The interaction response.
    """
    invoking_user_id = interaction.user_id
    thanked_user_id = interaction.command.target_user_id() if interaction.command else None

    if not thanked_user_id or not invoking_user_id:
        logger.warning("Couldn't resolve the thanking or thanked user.")
        return error_response()

    if thanked_user_id == invoking_user_id:
        return message_response("You can't thank yourself!", ephemeral=True)

    increment_thanked_user(store, thanked_user_id)
    return message_response(f"<@{thanked_user_id}> -- you received thanks from <@{invoking_user_id}>!")


def handle_check_my_thanks(interaction, store):
    """
    Handles the /my_thanks command.

    Args:
        interaction (Interaction): The parsed interaction.
        store (ThanksStore): The thanks store.

    Returns:
        dict: The interaction response.
    """
    if not interaction.user_id:
        return error_response()

    thanks_count = check_my_thanks(store, interaction.user_id)
    if thanks_count == 0:
        return message_response("You don't have any thanks yet!")
    return message_response(f"You've received {thanks_count} thanks :tada:")
