import os
import yaml

from config.root_config import *
from utility.logger import get_logger
log = get_logger()

CONFIG_FILE = "config.yaml"
config = None

# ──────────────────────────
# Configuration Helper Functions
# ──────────────────────────
def parse_config(data: dict) -> Config:
    """
    Build a Config dataclass from the parsed YAML mapping.
    Missing sections and keys fall back to the dataclass defaults.
    """
    data = data or {}
    bot = data.get("bot") or {}
    objectives = data.get("objectives") or {}
    return Config(
        bot=BotConfig(
            bot_token=bot.get("bot_token", ""),
            guild_id=bot.get("guild_id"),
            channel_id=bot.get("channel_id"),
            sync_commands=bot.get("sync_commands", True),
            discord_dropdown_limit=bot.get("discord_dropdown_limit", 25),
            discord_field_limit=bot.get("discord_field_limit", 25),
        ),
        status=StatusConfig(**(data.get("status") or {})),
        board=BoardConfig(**(data.get("board") or {})),
        store=StoreConfig(**(data.get("store") or {})),
        objectives=ObjectivesConfig(
            kinds=objectives.get("kinds") or list(DEFAULT_OBJECTIVE_KINDS),
            zones=objectives.get("zones") or list(DEFAULT_ZONES),
        ),
    )

async def load_config(file_path: str = CONFIG_FILE) -> bool:
    """
    Load the configuration from a YAML file into the module-level Config.
    Args:
        file_path (str): Path to the YAML file.
    Returns:
        bool: False if the file exists but could not be parsed.
    """
    global config
    if not os.path.exists(file_path):
        log.error(f"Config file {file_path} not found. Using defaults.")
        config = Config()
    else:
        try:
            log.debug("Loading config...")
            with open(file_path, "r") as file:
                config = parse_config(yaml.safe_load(file))
        except Exception as e:
            config = Config()
            log.error(f"Failed to load config: {e}")
            return False

    # The token is a secret, allow keeping it out of the YAML file
    env_token = os.environ.get("BOT_TOKEN")
    if env_token:
        config.bot.bot_token = env_token
    log.info("Finished loading config")
    return True
