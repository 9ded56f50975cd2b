"""Interaction payload model.

Discord delivers every interaction as one JSON object. Only the parts this
bot reads are modelled here; command data is parsed into one of three
variants depending on how the command was invoked.
"""
from dataclasses import dataclass, field
from enum import IntEnum


class InteractionType(IntEnum):
    PING = 1
    APPLICATION_COMMAND = 2


class CommandType(IntEnum):
    CHAT_INPUT = 1
    USER = 2
    MESSAGE = 3


class InteractionResponseType(IntEnum):
    PONG = 1
    CHANNEL_MESSAGE_WITH_SOURCE = 4


EPHEMERAL = 1 << 6


@dataclass
class SlashCommand:
    """A chat input command (``/thank @user``)."""
    name: str
    options: list = field(default_factory=list)

    def target_user_id(self):
        if not isinstance(self.options, list) or not self.options:
            return None
        option = self.options[0]
        if not isinstance(option, dict):
            return None
        return snowflake(option.get("value"))


@dataclass
class UserCommand:
    """A command run from a user's context menu."""
    name: str
    target_id: str = None

    def target_user_id(self):
        return snowflake(self.target_id)


@dataclass
class MessageCommand:
    """A command run from a message's context menu."""
    name: str
    messages: dict = field(default_factory=dict)

    def target_user_id(self):
        if not isinstance(self.messages, dict):
            return None
        # Discord resolves exactly one message here; take the first if not
        message = next(iter(self.messages.values()), None)
        return snowflake(nested(message, "author", "id"))


def nested(obj, *keys):
    """Walks nested dicts, returning None as soon as a level is missing or not a dict."""
    for key in keys:
        if not isinstance(obj, dict):
            return None
        obj = obj.get(key)
    return obj


def snowflake(value):
    """Returns ``value`` if it looks like a Discord id, else None."""
    if isinstance(value, str) and value:
        return value
    return None


COMMAND_VARIANTS = {
    CommandType.CHAT_INPUT: lambda name, data: SlashCommand(name, data.get("options") or []),
    CommandType.USER: lambda name, data: UserCommand(name, data.get("target_id")),
    CommandType.MESSAGE: lambda name, data: MessageCommand(
        name, nested(data, "resolved", "messages") or {}
    ),
}


@dataclass
class Interaction:
    type: int
    user_id: str = None
    command_name: str = None
    command: object = None

    @property
    def is_ping(self):
        return self.type == InteractionType.PING

    @property
    def is_command(self):
        return self.type == InteractionType.APPLICATION_COMMAND


def invoking_user_id(data):
    """
    Returns the id of the user who invoked the interaction.

    Guild interactions carry the user under ``member``, DMs under ``user``.
    """
    return snowflake(nested(data, "member", "user", "id")) or snowflake(nested(data, "user", "id"))


def parse_command(data):
    """
    Parses the ``data`` object of an application command.

    Returns:
        The command variant, or None if the command type is not one we know.
    """
    name = data.get("name")
    try:
        command_type = CommandType(data.get("type"))
    except ValueError:
        return None
    return COMMAND_VARIANTS[command_type](name, data)


def parse_interaction(payload):
    """
    Parses a raw interaction payload.

    Args:
        payload (dict): The decoded JSON body.

    Returns:
        Interaction: The parsed interaction.

    Raises:
        ValueError: If the payload is not a JSON object.
    """
    if not isinstance(payload, dict):
        raise ValueError("Interaction payload must be a JSON object")

    interaction = Interaction(type=payload.get("type"), user_id=invoking_user_id(payload))
    data = payload.get("data")
    if interaction.is_command and isinstance(data, dict):
        interaction.command_name = data.get("name")
        interaction.command = parse_command(data)
    return interaction
