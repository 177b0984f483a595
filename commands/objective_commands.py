import time
from typing import List

import discord
from discord import app_commands

import config.config as cfg
import state.state as st
from utility.logger import get_logger
log = get_logger()
import utility.helper_functions as helpers
import utility.objective_helpers as obj_helpers
from utility.board import format_remaining, format_utc_time
from utility.errors import StoreError, ValidationError
from tasks.objective_tasks import refresh_board_locked


def _choices(vocabulary: List[str], current: str) -> List[app_commands.Choice[str]]:
    matches = obj_helpers.autocomplete(vocabulary, current, cfg.config.bot.discord_dropdown_limit)
    return [app_commands.Choice(name=match, value=match) for match in matches]

async def objective_autocomplete(interaction: discord.Interaction, current: str) -> List[app_commands.Choice[str]]:
    return _choices(cfg.config.objectives.kinds, current)

async def zone_autocomplete(interaction: discord.Interaction, current: str) -> List[app_commands.Choice[str]]:
    return _choices(cfg.config.objectives.zones, current)


async def _refresh_after_command():
    try:
        await refresh_board_locked()
    except StoreError as e:
        log.error(f"Failed to refresh the board: {e}")


def register_commands(bot):

    @bot.tree.command(name="addobjectives", description="Add a new objective")
    @app_commands.describe(obj="Type", zone="Map", hours="Hours", minutes="Minutes")
    @app_commands.autocomplete(obj=objective_autocomplete, zone=zone_autocomplete)
    async def slash_addobjectives(interaction: discord.Interaction, obj: str, zone: str,
                                  hours: app_commands.Range[int, 0, obj_helpers.MAX_HOURS],
                                  minutes: app_commands.Range[int, 0, obj_helpers.MAX_HOURS * 60]):
        await helpers.log_interaction(interaction)
        try:
            duration = obj_helpers.objective_duration(hours, minutes)
        except ValidationError as e:
            await interaction.response.send_message(f"❌ {e}", ephemeral=True)
            return
        try:
            async with st.state.lock:
                _, end_time = obj_helpers.create_objective(
                    st.state, hours, minutes, obj, zone, int(time.time())
                )
        except ValidationError as e:
            log.info(f"Rejected /addobjectives from {interaction.user}: {e}")
            await interaction.response.send_message("❌ Please select valid options from the lists!", ephemeral=True)
            return
        except StoreError as e:
            log.error(f"Failed to add objective: {e}")
            await interaction.response.send_message("❌ Could not save the objective, please try again.", ephemeral=True)
            return

        if end_time is None:
            when = f"Timer paused, {format_remaining(duration)} remaining"
        else:
            when = f"Ends at `{format_utc_time(end_time)} UTC`"
        # The objective is saved, the board must follow even if the reply fails
        try:
            await interaction.response.send_message(
                f"✅ **{interaction.user.name}** added **{obj}** in **{zone}** ({when})."
            )
        finally:
            await _refresh_after_command()

    @bot.tree.command(name="clear", description="Clear all objectives")
    async def slash_clear(interaction: discord.Interaction):
        await helpers.log_interaction(interaction)
        try:
            async with st.state.lock:
                obj_helpers.clear_objectives(st.state)
        except StoreError as e:
            log.error(f"Failed to clear objectives: {e}")
            await interaction.response.send_message("❌ Could not clear the objectives, please try again.", ephemeral=True)
            return
        try:
            await interaction.response.send_message("🗑️ All objectives cleared.", ephemeral=True)
        finally:
            await _refresh_after_command()
