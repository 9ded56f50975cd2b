"""Registers the bot's application commands with Discord.

Run once after changing the command list:

    thankbot-register-commands
"""
import logging

import requests

import config
from thankbot.interactions import CommandType

API_BASE = "https://discord.com/api/v10"
USER_OPTION = 6

COMMANDS = [
    {
        "name": "thank",
        "type": CommandType.CHAT_INPUT,
        "description": "Thank another user",
        "options": [
            {
                "name": "user",
                "description": "The user to thank",
                "type": USER_OPTION,
                "required": True,
            }
        ],
    },
    {"name": "Thank", "type": CommandType.USER},
    {"name": "Thank", "type": CommandType.MESSAGE},
    {
        "name": "my_thanks",
        "type": CommandType.CHAT_INPUT,
        "description": "See how many thanks you have received",
    },
]


def commands_url(app_id, guild_id=None):
    if guild_id:
        return f"{API_BASE}/applications/{app_id}/guilds/{guild_id}/commands"
    return f"{API_BASE}/applications/{app_id}/commands"


def register_commands(app_id, bot_token, guild_id=None, commands=None):
    """
    Overwrites the application's commands with ``commands``.

    Args:
        app_id (str): Discord application ID.
        bot_token (str): Bot token used to authorize the request.
        guild_id (str): Register to this guild only instead of globally.
        commands (list): Command definitions. Defaults to COMMANDS.

    Returns:
        list: The commands as registered by Discord.

    Raises:
        RuntimeError: If Discord rejects the request.
    """
    if not app_id or not bot_token:
        raise ValueError("Application ID and bot token are required")
    if commands is None:
        commands = COMMANDS

    headers = {
        "Authorization": f"Bot {bot_token}",
        "Content-Type": "application/json",
    }
    response = requests.put(commands_url(app_id, guild_id), json=commands, headers=headers, timeout=10)
    if response.status_code == 200:
        logging.info(f"Registered {len(commands)} commands.")
        return response.json()

    logging.error(f"Failed to register commands: {response.status_code} {response.text}")
    raise RuntimeError(f"Discord API returned {response.status_code}: {response.text}")


def main():
    from thankbot import configure_logging

    configure_logging()
    register_commands(config.DISCORD_APP_ID, config.DISCORD_BOT_TOKEN, config.DISCORD_GUILD_ID)


if __name__ == "__main__":
    main()
