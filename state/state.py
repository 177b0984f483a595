import asyncio
from dataclasses import dataclass, field
from typing import Optional

import config.config as cfg
from state.objective_store import ObjectiveStore
from utility.logger import get_logger
log = get_logger()

state = None

@dataclass
class State:
    """
    Process-wide runtime state. Lives from startup to shutdown and is not
    persisted: a restart always assumes the game server is online.
    """
    store: ObjectiveStore
    server_online: bool = True
    board_message_id: Optional[int] = None
    # Serializes store mutations and the board refresh that follows them
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

# ──────────────────────────
# State keeping
# ──────────────────────────
async def load_state() -> bool:
    """
    Open the objective store and build the runtime state from the loaded config.
    Returns:
        bool: False if the store could not be opened.
    """
    global state
    try:
        store = ObjectiveStore(
            cfg.config.store.db_path,
            cfg.config.objectives.kinds,
            cfg.config.objectives.zones,
        )
    except Exception as e:
        log.error(f"Failed to load state: {e}")
        return False
    state = State(store=store)
    log.debug(f"Finished loading state. {store.count()} objectives in store")
    return True
