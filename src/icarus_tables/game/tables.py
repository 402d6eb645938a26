"""The game tables most consumers need, loaded together."""

from __future__ import annotations

from typing import Any, cast

from icarus_tables.deserializer import DefaultingMode
from icarus_tables.game.rows import (
    AICreatureTypeRow,
    AISetupRow,
    AtmosphereRow,
    BreakableRockRow,
    ItemableRow,
    ItemRewardEntry,
    ItemRewardsRow,
    ItemStaticRow,
    ItemTemplateRow,
    StatDescriptionRow,
    TerrainRow,
    WorkshopItemRow,
)
from icarus_tables.registry import FileProvider, TableRegistry, TableSource
from icarus_tables.table import DataTable, RowT
from icarus_tables.values import NONE_PATH, RowEnum

TERRAINS = TableSource("Prospects/D_Terrains.json", TerrainRow)
ATMOSPHERES = TableSource("Prospects/D_Atmospheres.json", AtmosphereRow)
ITEM_TEMPLATES = TableSource("Items/D_ItemTemplate.json", ItemTemplateRow)
ITEMS_STATIC = TableSource("Items/D_ItemsStatic.json", ItemStaticRow)
ITEMABLE = TableSource("Traits/D_Itemable.json", ItemableRow)
ITEM_REWARDS = TableSource("Items/D_ItemRewards.json", ItemRewardsRow)
WORKSHOP_ITEMS = TableSource("MetaWorkshop/D_WorkshopItems.json", WorkshopItemRow)
BREAKABLE_ROCKS = TableSource("World/D_BreakableRockData.json", BreakableRockRow)
AI_SETUP = TableSource("AI/D_AISetup.json", AISetupRow)
AI_CREATURE_TYPES = TableSource("AI/D_AICreatureType.json", AICreatureTypeRow)
STATS = TableSource("Stats/D_Stats.json", StatDescriptionRow)

GAME_TABLE_SOURCES: tuple[TableSource, ...] = (
    TERRAINS,
    ATMOSPHERES,
    ITEM_TEMPLATES,
    ITEMS_STATIC,
    ITEMABLE,
    ITEM_REWARDS,
    WORKSHOP_ITEMS,
    BREAKABLE_ROCKS,
    AI_SETUP,
    AI_CREATURE_TYPES,
    STATS,
)


class GameTables(TableRegistry):
    """Registry of the shared game tables with typed accessors."""

    @classmethod
    def load(  # type: ignore[override]
        cls,
        provider: FileProvider,
        sources: tuple[TableSource, ...] = GAME_TABLE_SOURCES,
        mode: DefaultingMode = DefaultingMode.MERGE,
    ) -> GameTables:
        return cast(GameTables, super().load(provider, sources, mode))

    def _table(self, source: TableSource, row_type: type[RowT]) -> DataTable[RowT]:
        table = self.get_typed(source.name, row_type)
        if table is None:
            raise KeyError(f"Table '{source.name}' is not loaded")
        return table

    @property
    def terrains(self) -> DataTable[TerrainRow]:
        return self._table(TERRAINS, TerrainRow)

    @property
    def atmospheres(self) -> DataTable[AtmosphereRow]:
        return self._table(ATMOSPHERES, AtmosphereRow)

    @property
    def item_templates(self) -> DataTable[ItemTemplateRow]:
        return self._table(ITEM_TEMPLATES, ItemTemplateRow)

    @property
    def items_static(self) -> DataTable[ItemStaticRow]:
        return self._table(ITEMS_STATIC, ItemStaticRow)

    @property
    def itemable(self) -> DataTable[ItemableRow]:
        return self._table(ITEMABLE, ItemableRow)

    @property
    def item_rewards(self) -> DataTable[ItemRewardsRow]:
        return self._table(ITEM_REWARDS, ItemRewardsRow)

    @property
    def workshop_items(self) -> DataTable[WorkshopItemRow]:
        return self._table(WORKSHOP_ITEMS, WorkshopItemRow)

    @property
    def breakable_rocks(self) -> DataTable[BreakableRockRow]:
        return self._table(BREAKABLE_ROCKS, BreakableRockRow)

    @property
    def ai_setup(self) -> DataTable[AISetupRow]:
        return self._table(AI_SETUP, AISetupRow)

    @property
    def ai_creature_types(self) -> DataTable[AICreatureTypeRow]:
        return self._table(AI_CREATURE_TYPES, AICreatureTypeRow)

    @property
    def stats(self) -> DataTable[StatDescriptionRow]:
        return self._table(STATS, StatDescriptionRow)

    def get_itemable_data(self, item: ItemTemplateRow | WorkshopItemRow | ItemRewardEntry) -> ItemableRow | None:
        """Follow an item through its template and static data to its itemable row.

        Accepts an item template row, or a workshop item or reward entry that
        refers to one. Returns None if any link in the chain is missing.
        """
        template: ItemTemplateRow | None
        if isinstance(item, ItemTemplateRow):
            template = item
        else:
            template = self.item_templates.get(item.item.row_name or "")
        if template is None:
            return None

        static_data = self.items_static.get(template.item_static_data.row_name or "")
        if static_data is None:
            return None
        return self.itemable.get(static_data.itemable.row_name or "")

    def get_creature_type(self, ai_setup: AISetupRow | RowEnum) -> AICreatureTypeRow | None:
        """Get the creature type for an AI setup row, or for a RowEnum naming one."""
        setup: Any = ai_setup
        if isinstance(ai_setup, RowEnum):
            if ai_setup.value is None or ai_setup.value == NONE_PATH:
                return None
            setup = self.ai_setup.get(ai_setup.value)
            if setup is None:
                return None
        return self.ai_creature_types.get(setup.creature_type.row_name or "")
