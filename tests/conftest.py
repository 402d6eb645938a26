"""Shared fixtures: a minimal extracted game Data directory."""

from __future__ import annotations

import json

import pytest


def handle(row_name, table_name):
    return {"RowName": row_name, "DataTableName": table_name}


GAME_DATA = {
    "Prospects/D_Terrains.json": {
        "RowStruct": "/Script/Icarus.IcarusTerrain",
        "Rows": [
            {
                "Name": "Terrain_016",
                "TerrainName": "Olympus",
                "Level": "/Game/Maps/Olympus.Olympus",
                "TemperatureMapRange": {"X": -10, "Y": 45.5},
            }
        ],
    },
    "Prospects/D_Atmospheres.json": {
        "Rows": [{"Name": "Earth", "AtmosphereName": "Earth", "ImageSmall": "None"}],
    },
    "Items/D_ItemTemplate.json": {
        "Rows": [
            {"Name": "Wood", "ItemStaticData": handle("Wood", "D_ItemsStatic")},
            {"Name": "Orphan", "ItemStaticData": handle("Nothing", "D_ItemsStatic")},
            {"Name": "Hollow", "ItemStaticData": handle("Hollow", "D_ItemsStatic")},
        ],
    },
    "Items/D_ItemsStatic.json": {
        "Rows": [
            {
                "Name": "Wood",
                "Itemable": handle("Item_Wood", "D_Itemable"),
                "AdditionalStats": {'(Value="BaseWeight")': 10},
                "ManualTags": {"GameplayTags": [{"TagName": "Item.Resource"}]},
            },
            {"Name": "Hollow", "Itemable": handle("Item_Gone", "D_Itemable")},
        ],
    },
    "Traits/D_Itemable.json": {
        "Defaults": {"Weight": 100, "MaxStack": 1},
        "Rows": [
            {
                "Name": "Item_Wood",
                "DisplayName": "Wood",
                "Icon": "Texture2D'/Game/Assets/2DArt/UI/Items/Wood.Wood'",
                "Weight": 50,
                "MaxStack": 100,
            }
        ],
    },
    "Items/D_ItemRewards.json": {
        "Rows": [
            {
                "Name": "Tree_Pine",
                "Rewards": [
                    {"Item": handle("Wood", "D_ItemTemplate"), "MinRandomStackCount": 2, "bRewardsScale": True}
                ],
            }
        ],
    },
    "MetaWorkshop/D_WorkshopItems.json": {
        "Rows": [
            {
                "Name": "Workshop_Wood",
                "Item": handle("Wood", "D_ItemTemplate"),
                "ResearchCost": [{"Meta": handle("Credits", "D_MetaCurrency"), "Amount": 5}],
            }
        ],
    },
    "World/D_BreakableRockData.json": {
        "Rows": [{"Name": "Rock", "ItemReward": handle("Tree_Pine", "D_ItemRewards")}],
    },
    "AI/D_AISetup.json": {
        "Rows": [
            {
                "Name": "Wolf",
                "CreatureType": handle("Predator", "D_AICreatureType"),
                "MovementMapping": {"Walk": {"MaxWalkSpeed": 150}, "EMovementState::Sprint": {"MaxWalkSpeed": 600}},
                "bNotifySelfType": True,
            },
            {"Name": "Ghost", "CreatureType": handle("Spirit", "D_AICreatureType")},
        ],
    },
    "AI/D_AICreatureType.json": {
        "Rows": [{"Name": "Predator", "CreatureName": "Predator"}],
    },
    "Stats/D_Stats.json": {
        "Rows": [
            {
                "Name": "BaseWeight",
                "Title": "Weight",
                "bIsWorldStat": True,
                "DisplayOperations": [{"Operation": "Multiply", "Value": 0.01}],
            }
        ],
    },
}


@pytest.fixture
def data_dir(tmp_path):
    for path, document in GAME_DATA.items():
        target = tmp_path / path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps(document), encoding="utf-8")
    return tmp_path

