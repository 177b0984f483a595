import os
import asyncio
import discord
from discord.ext import commands

import config.config as cfg
import state.state as st
from utility.logger import get_logger
log = get_logger()


# ──────────────────────────
# Load Config Before Creating the Bot
# ──────────────────────────
async def load_config_early():
    log.info("############### Objective Bot Start ###############")
    if not await cfg.load_config():
        log.error("ERROR: Failed to load configuration. An error occured. Exiting...")
        exit(1)  # Stop execution if config failed to load
    if not cfg.config.bot.bot_token or cfg.config.bot.channel_id is None:
        log.error("ERROR: bot_token and channel_id must be configured. Exiting...")
        exit(1)
    if not await st.load_state():
        log.error("ERROR: Failed to open the objective store. Exiting...")
        exit(1)

# Run the config load early
asyncio.run(load_config_early())

# Create bot instance
intents = discord.Intents.default()
intents.message_content = False

bot = commands.Bot(command_prefix="!", intents=intents)

# Register commands from all .py files in the commands folder
commands_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), "commands")
for filename in os.listdir(commands_dir):
    if filename.endswith(".py") and not filename.startswith("_"):
        module_name = filename[:-3]  # Remove .py extension
        try:
            module = __import__(f"commands.{module_name}", fromlist=["register_commands"])
            if hasattr(module, "register_commands"):
                module.register_commands(bot)
                log.debug(f"Registered commands from {module_name}")
            else:
                log.warning(f"No register() function in {module_name}, skipping.")
        except Exception as e:
            log.error(f"Error loading {module_name}: {e}")


async def sync_commands():
    try:
        log.info("Attempting to sync commands...")
        if cfg.config.bot.guild_id:
            guild = discord.Object(id=cfg.config.bot.guild_id)
            bot.tree.copy_global_to(guild=guild)
            synced_commands = await bot.tree.sync(guild=guild)
        else:
            synced_commands = await bot.tree.sync()
        log.info(f"Synced {len(synced_commands)} commands.")
    except Exception as e:
        log.error(f"Error syncing slash commands: {e}")

# ──────────────────────────
# Bot Lifecycle
# ──────────────────────────
@bot.event
async def on_ready():
    if cfg.config.bot.sync_commands:
        await sync_commands()
    else:
        log.info("Skipping commands sync.")

    import tasks.objective_tasks as obj_tasks
    obj_tasks.start_tasks(bot)
    log.info(f"Logged in as {bot.user} (ID: {bot.user.id})")

bot.run(cfg.config.bot.bot_token)
