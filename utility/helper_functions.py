import discord

from utility.logger import get_logger
log = get_logger()

async def log_interaction(interaction: discord.Interaction):
    """Log who ran which slash command, with which options, and where."""
    command = interaction.command.qualified_name if interaction.command else "unknown"
    options = interaction.namespace.__dict__ if interaction.namespace else {}
    where = f"#{interaction.channel}" if interaction.guild else "DM"
    log.info(f"[Command] {interaction.user} ({interaction.user.id}) ran /{command} {options} in {where}")
