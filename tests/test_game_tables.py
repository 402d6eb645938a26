"""Tests for the shared game table set."""

from __future__ import annotations

import pytest

from icarus_tables.errors import StructuralParseError
from icarus_tables.game import GAME_TABLE_SOURCES, GameTables
from icarus_tables.game.rows import (
    AISetupRow,
    ItemRewardEntry,
    ItemTemplateRow,
    MovementState,
    StatDisplayOperation,
)
from icarus_tables.registry import DirectoryFileProvider
from icarus_tables.values import ObjectPointer, RowEnum, RowHandle


@pytest.fixture
def tables(data_dir):
    return GameTables.load(DirectoryFileProvider(data_dir))


class TestLoad:
    def test_all_tables_loaded(self, tables):
        assert isinstance(tables, GameTables)
        assert len(tables) == len(GAME_TABLE_SOURCES)
        assert "D_ItemsStatic" in tables

    def test_typed_accessors(self, tables):
        assert tables.terrains["Terrain_016"].terrain_name == "Olympus"
        assert tables.itemable["Item_Wood"].max_stack == 100
        assert tables.ai_creature_types.count == 1

    def test_nested_values(self, tables):
        terrain = tables.terrains["Terrain_016"]
        assert terrain.level == ObjectPointer("/Game/Maps/Olympus.Olympus")
        assert terrain.temperature_map_range.x == -10.0
        assert terrain.temperature_map_range.y == 45.5
        assert terrain.biome_map is None

        static = tables.items_static["Wood"]
        assert static.additional_stats == {RowEnum("BaseWeight"): 10}
        assert static.manual_tags.tag_names() == ["Item.Resource"]

    def test_b_prefixed_keys(self, tables):
        assert tables.item_rewards["Tree_Pine"].rewards[0].rewards_scale is True
        assert tables.ai_setup["Wolf"].notify_self_type is True
        assert tables.stats["BaseWeight"].is_world_stat is True

    def test_enum_values(self, tables):
        wolf = tables.ai_setup["Wolf"]
        assert wolf.movement_mapping[MovementState.WALK].max_walk_speed == 150
        assert wolf.movement_mapping[MovementState.SPRINT].max_walk_speed == 600
        assert tables.stats["BaseWeight"].display_operations[0].operation is StatDisplayOperation.MULTIPLY

    def test_asset_paths(self, tables):
        icon = tables.itemable["Item_Wood"].icon
        assert icon.get_asset_path() == "Icarus/Content/Assets/2DArt/UI/Items/Wood"
        assert tables.atmospheres["Earth"].image_small.get_asset_path() == "None"

    def test_missing_table_file_fails(self, data_dir):
        (data_dir / "Stats" / "D_Stats.json").unlink()
        with pytest.raises(FileNotFoundError):
            GameTables.load(DirectoryFileProvider(data_dir))

    def test_broken_table_fails(self, data_dir):
        (data_dir / "AI" / "D_AICreatureType.json").write_text('{"Rows": [{}]}', encoding="utf-8")
        with pytest.raises(StructuralParseError, match="D_AICreatureType"):
            GameTables.load(DirectoryFileProvider(data_dir))


class TestItemableData:
    def test_from_template(self, tables):
        itemable = tables.get_itemable_data(tables.item_templates["Wood"])
        assert itemable is tables.itemable["Item_Wood"]

    def test_from_workshop_item(self, tables):
        itemable = tables.get_itemable_data(tables.workshop_items["Workshop_Wood"])
        assert itemable.display_name == "Wood"

    def test_from_reward_entry(self, tables):
        entry = tables.item_rewards["Tree_Pine"].rewards[0]
        assert tables.get_itemable_data(entry) is tables.itemable["Item_Wood"]

    def test_missing_template(self, tables):
        entry = ItemRewardEntry(item=RowHandle("Nothing", "D_ItemTemplate"))
        assert tables.get_itemable_data(entry) is None

    def test_unset_handle(self, tables):
        assert tables.get_itemable_data(ItemRewardEntry()) is None

    def test_missing_static_data(self, tables):
        assert tables.get_itemable_data(tables.item_templates["Orphan"]) is None

    def test_missing_itemable(self, tables):
        assert tables.get_itemable_data(tables.item_templates["Hollow"]) is None

    def test_detached_template(self, tables):
        assert tables.get_itemable_data(ItemTemplateRow(name="Loose")) is None


class TestCreatureType:
    def test_from_setup_row(self, tables):
        creature = tables.get_creature_type(tables.ai_setup["Wolf"])
        assert creature.creature_name == "Predator"

    def test_from_row_enum(self, tables):
        assert tables.get_creature_type(RowEnum("Wolf")) is tables.ai_creature_types["Predator"]

    def test_none_value(self, tables):
        assert tables.get_creature_type(RowEnum("None")) is None
        assert tables.get_creature_type(RowEnum()) is None

    def test_unknown_setup(self, tables):
        assert tables.get_creature_type(RowEnum("Dragon")) is None

    def test_missing_creature_type(self, tables):
        assert tables.get_creature_type(tables.ai_setup["Ghost"]) is None
        assert tables.get_creature_type(AISetupRow(name="Blank")) is None
