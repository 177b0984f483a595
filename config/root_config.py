from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_OBJECTIVE_KINDS = [
    "Common(Green) Vortex", "Uncommon(Blue) Vortex", "Rare(Purple) Vortex", "Legendary(Gold) Vortex",
    "Common(Green) Power Core", "Uncommon(Blue) Power Core", "Rare(Purple) Power Core", "Legendary(Gold) Power Core",
    "4.4 Ore", "5.4 Ore", "6.4 Ore", "7.4 Ore", "8.4 Ore",
    "4.4 Fiber", "5.4 Fiber", "6.4 Fiber", "7.4 Fiber", "8.4 Fiber",
    "4.4 Hide", "5.4 Hide", "6.4 Hide", "7.4 Hide", "8.4 Hide",
    "4.4 Wood", "5.4 Wood", "6.4 Wood", "7.4 Wood", "8.4 Wood",
]

DEFAULT_ZONES = [
    "Avalanche Incline", "Avalanche Ravine", "Battlebrae Flatland", "Battlebrae Grassland",
    "Battlebrae Lake", "Battlebrae Meadow", "Battlebrae Peaks", "Battlebrae Plain",
    "Black Monastery", "Bleachskull Desert", "Bleachskull Steppe", "Braemore Lowland",
    "Braemore Upland", "Brambleshore Hinterlands", "Citadel of Ash", "Daemonium Keep",
]

@dataclass
class BotConfig:
    bot_token: str = ""
    guild_id: Optional[int] = None   # Sync commands to this guild only, globally if None
    channel_id: Optional[int] = None # Channel that holds the live board
    sync_commands: bool = True
    discord_dropdown_limit: int = 25
    discord_field_limit: int = 25

@dataclass
class StatusConfig:
    url: str = "https://serverstatus-ams.albiononline.com/"
    online_token: str = "online"
    user_agent: str = "Mozilla/5.0"
    timeout_sec: int = 10
    poll_interval_sec: int = 60

@dataclass
class BoardConfig:
    refresh_interval_min: int = 30
    title: str = "🟢 Active Objectives"
    color: str = "#e1e100"

    @property
    def color_value(self) -> int:
        """ The hex color string as an int, the way discord.Embed wants it. """
        return int(self.color.lstrip("#"), 16)

@dataclass
class StoreConfig:
    db_path: str = "_data/objectives.db"

@dataclass
class ObjectivesConfig:
    kinds: List[str] = field(default_factory=lambda: list(DEFAULT_OBJECTIVE_KINDS))
    zones: List[str] = field(default_factory=lambda: list(DEFAULT_ZONES))

@dataclass
class Config:
    bot: BotConfig = field(default_factory=BotConfig)
    status: StatusConfig = field(default_factory=StatusConfig)
    board: BoardConfig = field(default_factory=BoardConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    objectives: ObjectivesConfig = field(default_factory=ObjectivesConfig)
