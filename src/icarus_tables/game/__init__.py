"""Row structs and the shared table set for the game's data."""

from icarus_tables.game.rows import (
    AICreatureTypeRow,
    AISetupRow,
    AtmosphereRow,
    BreakableRockRow,
    ItemableRow,
    ItemRewardsRow,
    ItemStaticRow,
    ItemTemplateRow,
    StatDescriptionRow,
    TerrainRow,
    WorkshopItemRow,
)
from icarus_tables.game.tables import GAME_TABLE_SOURCES, GameTables

__all__ = [
    "GameTables",
    "GAME_TABLE_SOURCES",
    # Rows
    "AICreatureTypeRow",
    "AISetupRow",
    "AtmosphereRow",
    "BreakableRockRow",
    "ItemableRow",
    "ItemRewardsRow",
    "ItemStaticRow",
    "ItemTemplateRow",
    "StatDescriptionRow",
    "TerrainRow",
    "WorkshopItemRow",
]
