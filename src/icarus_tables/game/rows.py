"""Row structs for the game tables shared by most consumers.

Only the columns consumers read are declared; the loader ignores the rest.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from icarus_tables.rows import KEY, DataTableRow
from icarus_tables.values import ObjectPointer, RowEnum, RowHandle


def _key(json_key: str, **kwargs: Any) -> Any:
    """Declare a field whose JSON key does not follow its Python name."""
    return field(metadata={KEY: json_key}, **kwargs)


class DynamicItemProperty(Enum):
    ASSOCIATED_ITEM_INVENTORY_ID = "AssociatedItemInventoryId"
    ASSOCIATED_ITEM_INVENTORY_SLOT = "AssociatedItemInventorySlot"
    DYNAMIC_STATE = "DynamicState"
    GUN_CURRENT_MAG_SIZE = "GunCurrentMagSize"
    CURRENT_AMMO_TYPE = "CurrentAmmoType"
    BUILDING_VARIATION = "BuildingVariation"
    DURABILITY = "Durability"
    ITEMABLE_STACK = "ItemableStack"
    MILLIJOULES_REMAINING = "MillijoulesRemaining"
    TRANSMUTABLE_UNITS = "TransmutableUnits"
    FILLABLE_STORED_UNITS = "Fillable_StoredUnits"
    FILLABLE_TYPE = "Fillable_Type"
    DECAYABLE_CURRENT_SPOIL_TIME = "Decayable_CurrentSpoilTime"
    INVENTORY_CONTAINER_LINKED_INVENTORY_ID = "InventoryContainer_LinkedInventoryId"
    MAX_DYNAMIC_ITEM_PROPERTIES = "MaxDynamicItemProperties"


class MovementState(Enum):
    UNDEFINED = "Undefined"
    STATIONARY = "Stationary"
    SNEAK = "Sneak"
    WALK = "Walk"
    JOG = "Jog"
    RUN = "Run"
    SPRINT = "Sprint"
    ATTACKING = "Attacking"


class StatDisplayOperation(Enum):
    NONE = "None"
    MULTIPLY = "Multiply"
    DIVISION = "Division"
    ADDITION = "Addition"


# Nested structs


@dataclass
class Vector2D:
    x: float = 0.0
    y: float = 0.0


@dataclass
class GameplayTag:
    # Stored as an FName in game, written as a plain string
    tag_name: str = ""


@dataclass
class GameplayTagContainer:
    gameplay_tags: list[GameplayTag] = field(default_factory=list)
    parent_tags: list[GameplayTag] = field(default_factory=list)

    def tag_names(self) -> list[str]:
        return [tag.tag_name for tag in self.gameplay_tags]


@dataclass
class WorkshopCost:
    meta: RowHandle = field(default_factory=RowHandle)
    amount: int = 0


@dataclass
class ItemDynamicData:
    property_type: DynamicItemProperty = DynamicItemProperty.ASSOCIATED_ITEM_INVENTORY_ID
    value: int = 0


@dataclass
class StatReplicated:
    stat: RowEnum = field(default_factory=RowEnum)
    value: int = 0


@dataclass
class CustomProperties:
    static_world_stats: list[StatReplicated] = field(default_factory=list)
    static_world_held_stats: list[StatReplicated] = field(default_factory=list)
    stats: list[StatReplicated] = field(default_factory=list)
    alterations: list[RowEnum] = field(default_factory=list)


@dataclass
class ItemRewardEntry:
    item: RowHandle = field(default_factory=RowHandle)
    drop_chance: float = 0.0
    drop_chance_additive_stat: RowHandle = field(default_factory=RowHandle)
    required_stat_to_drop: RowHandle = field(default_factory=RowHandle)
    min_random_stack_count: int = 0
    max_random_stack_count: int = 0
    rewards_scale: bool = _key("bRewardsScale", default=False)
    stack_additive_stat: RowHandle = field(default_factory=RowHandle)
    stack_multiplicative_stat: RowHandle = field(default_factory=RowHandle)


@dataclass
class MovementStateData:
    max_walk_speed: float = 0.0
    ground_friction: float = 0.0
    braking_friction: float = 0.0
    max_acceleration: float = 0.0
    braking_deceleration: float = 0.0
    rotation_rate: float = 0.0
    max_swim_speed: float = 0.0


@dataclass
class CriticalHitLocation:
    bone_name: str = ""
    affects_children: bool = False


@dataclass
class StatDisplayCalculation:
    operation: StatDisplayOperation = StatDisplayOperation.NONE
    value: float = 0.0


# Rows


@dataclass
class TerrainRow(DataTableRow):
    terrain_name: str = ""
    level: ObjectPointer | None = None
    temperature_map: ObjectPointer | None = None
    temperature_map_range: Vector2D = field(default_factory=Vector2D)
    biome_map: ObjectPointer | None = None
    bounds: ObjectPointer | None = None
    spawn_config: RowHandle = field(default_factory=RowHandle)
    fish_config: RowHandle = field(default_factory=RowHandle)
    audio_zone_map: ObjectPointer | None = None


@dataclass
class AtmosphereRow(DataTableRow):
    atmosphere_name: str = ""
    image_small: ObjectPointer | None = None
    image_medium: ObjectPointer | None = None
    image_large: ObjectPointer | None = None


@dataclass
class WorkshopItemRow(DataTableRow):
    item: RowHandle = field(default_factory=RowHandle)
    research_cost: list[WorkshopCost] = field(default_factory=list)
    replication_cost: list[WorkshopCost] = field(default_factory=list)
    required_mission: RowHandle = field(default_factory=RowHandle)


@dataclass
class ItemTemplateRow(DataTableRow):
    item_static_data: RowHandle = field(default_factory=RowHandle)
    item_dynamic_data: list[ItemDynamicData] = field(default_factory=list)
    custom_properties: CustomProperties = field(default_factory=CustomProperties)
    database_guid: str = ""
    item_owner_lookup_id: int = 0
    runtime_tags: GameplayTagContainer = field(default_factory=GameplayTagContainer)


@dataclass
class ItemStaticRow(DataTableRow):
    meshable: RowHandle = field(default_factory=RowHandle)
    itemable: RowHandle = field(default_factory=RowHandle)
    interactable: RowHandle = field(default_factory=RowHandle)
    hitable: RowHandle = field(default_factory=RowHandle)
    equippable: RowHandle = field(default_factory=RowHandle)
    focusable: RowHandle = field(default_factory=RowHandle)
    highlightable: RowHandle = field(default_factory=RowHandle)
    actionable: RowHandle = field(default_factory=RowHandle)
    buildable: RowHandle = field(default_factory=RowHandle)
    consumable: RowHandle = field(default_factory=RowHandle)
    usable: RowHandle = field(default_factory=RowHandle)
    combustible: RowHandle = field(default_factory=RowHandle)
    deployable: RowHandle = field(default_factory=RowHandle)
    armour: RowHandle = field(default_factory=RowHandle)
    ballistic: RowHandle = field(default_factory=RowHandle)
    vehicular: RowHandle = field(default_factory=RowHandle)
    fillable: RowHandle = field(default_factory=RowHandle)
    durable: RowHandle = field(default_factory=RowHandle)
    floatable: RowHandle = field(default_factory=RowHandle)
    rocketable: RowHandle = field(default_factory=RowHandle)
    inventory: RowHandle = field(default_factory=RowHandle)
    processing: RowHandle = field(default_factory=RowHandle)
    thermal: RowHandle = field(default_factory=RowHandle)
    experience: RowHandle = field(default_factory=RowHandle)
    slotable: RowHandle = field(default_factory=RowHandle)
    decayable: RowHandle = field(default_factory=RowHandle)
    flammable: RowHandle = field(default_factory=RowHandle)
    transmutable: RowHandle = field(default_factory=RowHandle)
    generator: RowHandle = field(default_factory=RowHandle)
    weight: RowHandle = field(default_factory=RowHandle)
    farmable: RowHandle = field(default_factory=RowHandle)
    inventory_container: RowHandle = field(default_factory=RowHandle)
    energy: RowHandle = field(default_factory=RowHandle)
    water: RowHandle = field(default_factory=RowHandle)
    oxygen: RowHandle = field(default_factory=RowHandle)
    fuel: RowHandle = field(default_factory=RowHandle)
    tool_damage: RowHandle = field(default_factory=RowHandle)
    ammo_type: RowHandle = field(default_factory=RowHandle)
    audio: RowHandle = field(default_factory=RowHandle)
    ranged_weapon_data: RowHandle = field(default_factory=RowHandle)
    firearm_data: RowHandle = field(default_factory=RowHandle)
    flod_data: RowHandle = field(default_factory=RowHandle)
    additional_stats: dict[RowEnum, int] = field(default_factory=dict)
    attachments: RowHandle = field(default_factory=RowHandle)
    crafting_experience: int = 0
    manual_tags: GameplayTagContainer = field(default_factory=GameplayTagContainer)
    generated_tags: GameplayTagContainer = field(default_factory=GameplayTagContainer)


@dataclass
class ItemableRow(DataTableRow):
    behaviour: ObjectPointer | None = None
    display_name: str = ""
    icon: ObjectPointer | None = None
    override_glow_icon: ObjectPointer | None = None
    description: str = ""
    flavor_text: str = ""
    weight: int = 0
    max_stack: int = 0


@dataclass
class ItemRewardsRow(DataTableRow):
    rewards: list[ItemRewardEntry] = field(default_factory=list)


@dataclass
class BreakableRockRow(DataTableRow):
    item_reward: RowHandle = field(default_factory=RowHandle)
    pyritic_crust_item_type: RowHandle = field(default_factory=RowHandle)
    durable: RowHandle = field(default_factory=RowHandle)
    tags: GameplayTagContainer = field(default_factory=GameplayTagContainer)
    break_sound: ObjectPointer | None = None


@dataclass
class AISetupRow(DataTableRow):
    actor_class: ObjectPointer | None = None
    controller_class: ObjectPointer | None = None
    creature_type: RowHandle = field(default_factory=RowHandle)
    descriptors: list[RowHandle] = field(default_factory=list)
    dead_item: RowHandle = field(default_factory=RowHandle)
    goap_setup: RowHandle = field(default_factory=RowHandle)
    default_navigation_filter: ObjectPointer | None = None
    relationships: RowHandle = field(default_factory=RowHandle)
    notified_npc_types: list[RowHandle] = field(default_factory=list)
    notify_self_type: bool = _key("bNotifySelfType", default=False)
    ai_growth: RowHandle = field(default_factory=RowHandle)
    movement_mapping: dict[MovementState, MovementStateData] = field(default_factory=dict)
    hunting_setup: RowHandle = field(default_factory=RowHandle)
    critical_hit_bones: list[CriticalHitLocation] = field(default_factory=list)
    audio: RowHandle = field(default_factory=RowHandle)
    collision_hit_event_bones: list[str] = field(default_factory=list)
    latent_death_duration: int = 0
    trophy: RowHandle = field(default_factory=RowHandle)
    loot: RowHandle = field(default_factory=RowHandle)
    hitable: RowHandle = field(default_factory=RowHandle)
    use_survival_character_state: bool = _key("bUseSurvivalCharacterState", default=False)
    start_with_survival_tick_disabled: bool = _key("bStartWithSurvivalTickDisabled", default=False)
    bestiary_group: RowHandle = field(default_factory=RowHandle)
    blacklist_bones: list[CriticalHitLocation] = field(default_factory=list)


@dataclass
class AICreatureTypeRow(DataTableRow):
    creature_name: str = ""


@dataclass
class StatDescriptionRow(DataTableRow):
    title: str = ""
    icon: ObjectPointer | None = None
    positive_title_format: str = ""
    negative_title_format: str = ""
    positive_description: str = ""
    negative_description: str = ""
    is_replicated: bool = _key("bIsReplicated", default=False)
    display_operations: list[StatDisplayCalculation] = field(default_factory=list)
    is_world_stat: bool = _key("bIsWorldStat", default=False)
    stat_category: RowHandle = field(default_factory=RowHandle)
    hide_stat_in_user_interface: bool = _key("bHideStatInUserInterface", default=False)
