import datetime
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

import discord

from state.objective_store import Objective
from utility.logger import get_logger
log = get_logger()

DEFAULT_TITLE = "🟢 Active Objectives"
DEFAULT_COLOR = 0xE1E100
MAINTENANCE_TEXT = "⚠️ **Server Maintenance.** Timers Stopped."
ALL_CLEAR_TEXT = "✅ No active objectives at the moment."

@dataclass
class BoardField:
    name: str
    value: str

@dataclass
class Board:
    title: str = DEFAULT_TITLE
    description: Optional[str] = None
    color: int = DEFAULT_COLOR
    fields: List[BoardField] = field(default_factory=list)
    footer: Optional[str] = None


# ──────────────────────────
# Rendering
# ──────────────────────────
def format_remaining(seconds: int) -> str:
    """ 9000 -> '2h 30m', 300 -> '5m'. Hours are left out when zero. """
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    return f"{hours}h {minutes}m" if hours > 0 else f"{minutes}m"

def format_utc_time(epoch_seconds: int) -> str:
    try:
        return datetime.datetime.fromtimestamp(epoch_seconds, datetime.timezone.utc).strftime("%H:%M")
    except (ValueError, OverflowError, OSError):
        # Deadline outside what datetime can represent
        return "--:--"

def objective_label(objective: Objective) -> str:
    if objective.is_paused:
        return f"⏸️ **Stopped** ({format_remaining(objective.remaining_seconds)} remaining)"
    end = objective.end_time
    # Discord renders <t:..:t> as local time and <t:..:R> as "in 2 hours"
    return f"⌛ <t:{end}:t> • <t:{end}:R> • `{format_utc_time(end)} UTC`"

def render_board(objectives: Sequence[Objective], online: bool, title: str = DEFAULT_TITLE,
                 color: int = DEFAULT_COLOR, field_limit: int = 25) -> Board:
    """
    Project the objective list and the availability flag into a board.
    While the server is down no countdowns are shown, even if objectives exist.
    """
    board = Board(title=title, color=color)
    if not online:
        board.description = MAINTENANCE_TEXT
        return board
    if not objectives:
        board.description = ALL_CLEAR_TEXT
        return board

    for objective in objectives[:field_limit]:
        board.fields.append(BoardField(
            name=f"📍 {objective.zone}",
            value=f"💰 {objective.objective}\n{objective_label(objective)}",
        ))
    hidden = len(objectives) - field_limit
    if hidden > 0:
        board.footer = f"+{hidden} more objectives"
    return board

def board_to_embed(board: Board) -> discord.Embed:
    embed = discord.Embed(
        title=board.title,
        description=board.description,
        color=board.color,
        timestamp=datetime.datetime.now(datetime.timezone.utc),
    )
    for board_field in board.fields:
        embed.add_field(name=board_field.name, value=board_field.value, inline=False)
    if board.footer:
        embed.set_footer(text=board.footer)
    return embed


# ──────────────────────────
# Publishing
# ──────────────────────────
class BoardPublisher:
    """
    Keeps exactly one live board message in the board channel.
    Each refresh deletes the previous message before posting the new one.
    """

    def __init__(self, channel_resolver: Callable[[], Optional[discord.abc.Messageable]],
                 title: str = DEFAULT_TITLE, color: int = DEFAULT_COLOR, field_limit: int = 25):
        self.channel_resolver = channel_resolver
        self.title = title
        self.color = color
        self.field_limit = field_limit

    async def refresh(self, state) -> bool:
        """
        Re-render from the store and replace the published board.
        Discord failures are logged and swallowed, StoreError propagates.
        Returns:
            bool: True if a new board message was posted.
        """
        board = render_board(
            state.store.list_ordered(), state.server_online,
            title=self.title, color=self.color, field_limit=self.field_limit,
        )
        channel = self.channel_resolver()
        if channel is None:
            log.error("Board: channel not found, cannot publish the board")
            return False

        if state.board_message_id is not None:
            try:
                await channel.get_partial_message(state.board_message_id).delete()
            except discord.NotFound:
                pass  # Message already deleted
            except discord.HTTPException as e:
                log.warning(f"Board: failed to delete previous board {state.board_message_id}: {e}")
            state.board_message_id = None

        try:
            message = await channel.send(embed=board_to_embed(board))
        except discord.HTTPException as e:
            log.error(f"Board: failed to publish board: {e}")
            return False
        state.board_message_id = message.id
        log.debug(f"Board: published board {message.id} with {len(board.fields)} objectives")
        return True
