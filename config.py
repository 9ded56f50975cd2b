import os

PORT = int(os.getenv("PORT", 8080))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DISCORD_PUBLIC_KEY = os.getenv("DISCORD_PUBLIC_KEY", "")
DISCORD_APP_ID = os.getenv("DISCORD_APP_ID", "")
DISCORD_BOT_TOKEN = os.getenv("DISCORD_BOT_TOKEN", "")
# Register commands to a single guild instead of globally when set
DISCORD_GUILD_ID = os.getenv("DISCORD_GUILD_ID") or None

# Empty means the in-memory store is used
REDIS_URL = os.getenv("REDIS_URL", "")
THANKS_NAMESPACE = os.getenv("THANKS_NAMESPACE", "prod_thanks")
