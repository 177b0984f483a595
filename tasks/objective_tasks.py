from discord.ext import tasks

import config.config as cfg
import state.state as st
import utility.globals as globals
from utility.availability import AvailabilityMonitor
from utility.board import BoardPublisher
from utility.reconcile import run_tick
from utility.logger import get_logger
log = get_logger()


async def refresh_board() -> bool:
    """Redraw the board. Callers must hold st.state.lock."""
    return await globals.board_publisher.refresh(st.state)

async def refresh_board_locked() -> bool:
    async with st.state.lock:
        return await refresh_board()


# Intervals are replaced from config in start_tasks()
@tasks.loop(seconds=60)
async def status_tick_task():
    """Poll the game server status, expire/pause/resume objectives, redraw if anything changed."""
    try:
        result = await run_tick(st.state, globals.availability_monitor, refresh_board)
        log.debug(f"Task status_tick_task: {result}")
    except Exception as e:
        log.error(f"Task status_tick_task: tick failed: {e}")

@tasks.loop(minutes=30)
async def board_refresh_task():
    """Redraw the board unconditionally, in case an earlier refresh was missed or failed."""
    log.debug("Task board_refresh_task: Running Task")
    try:
        await refresh_board_locked()
    except Exception as e:
        log.error(f"Task board_refresh_task: refresh failed: {e}")


def setup_services(bot):
    board_config = cfg.config.board
    globals.board_publisher = BoardPublisher(
        lambda: bot.get_channel(cfg.config.bot.channel_id),
        title=board_config.title,
        color=board_config.color_value,
        field_limit=cfg.config.bot.discord_field_limit,
    )
    globals.availability_monitor = AvailabilityMonitor.from_config(
        cfg.config.status, online=st.state.server_online
    )

def start_tasks(bot):
    setup_services(bot)
    status_tick_task.change_interval(seconds=cfg.config.status.poll_interval_sec)
    board_refresh_task.change_interval(minutes=cfg.config.board.refresh_interval_min)
    if not status_tick_task.is_running():
        status_tick_task.start()
    if not board_refresh_task.is_running():
        board_refresh_task.start()
