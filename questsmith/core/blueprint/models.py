"""Blueprint value snapshots

Immutable, structurally comparable records consumed by the generators.
Collections are tuples so equal blueprints also hash equal. Edits are made
with ``dataclasses.replace``; nothing here is ever mutated in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

from questsmith.core.blueprint.enums import (
    BlueprintType,
    DataFieldType,
    FinishType,
    RewardType,
    TriggerTarget,
    TriggerType,
)
from questsmith.core.blueprint.schedule import ScheduleAction

DEFAULT_QUEST_NAMESPACE = "Schedule1Mods.Quests"
DEFAULT_NPC_NAMESPACE = "Schedule1Mods.NPCs"


# === Quest side ===


@dataclass(frozen=True)
class QuestTrigger:
    """One trigger; ``target_action`` has the ``"Component.EventName"`` form."""

    trigger_type: TriggerType = TriggerType.ACTION_TRIGGER
    target_action: str = ""
    target_npc_id: str = ""
    target_quest_id: str = ""
    target_quest_entry_index: Optional[int] = None
    trigger_target: TriggerTarget = TriggerTarget.QUEST_START
    objective_index: Optional[int] = None
    finish_type: FinishType = FinishType.COMPLETE

    @property
    def component(self) -> str:
        parts = self.target_action.split(".")
        return parts[0] if len(parts) >= 2 else ""

    @property
    def event_name(self) -> str:
        parts = self.target_action.split(".")
        return parts[1] if len(parts) >= 2 else self.target_action


@dataclass(frozen=True)
class QuestObjective:
    name: str = ""
    title: str = ""
    required_progress: int = 1
    has_location: bool = False
    location_x: float = 0.0
    location_y: float = 0.0
    location_z: float = 0.0
    create_poi: bool = True
    auto_start: bool = True
    start_triggers: tuple[QuestTrigger, ...] = ()
    finish_triggers: tuple[QuestTrigger, ...] = ()

    @property
    def has_start_triggers(self) -> bool:
        return len(self.start_triggers) > 0


@dataclass(frozen=True)
class QuestReward:
    reward_type: RewardType = RewardType.MONEY
    amount: int = 100
    item_id: str = ""
    quantity: int = 1


@dataclass(frozen=True)
class DataClassField:
    """User-declared persisted field of the generated quest data model."""

    field_name: str = ""
    field_type: DataFieldType = DataFieldType.BOOL
    default_value: str = ""
    comment: str = ""


def _default_objectives() -> tuple[QuestObjective, ...]:
    return (QuestObjective(name="objective_1", title="Complete objective"),)


@dataclass(frozen=True)
class QuestBlueprint:
    class_name: str = ""
    quest_id: str = ""
    quest_title: str = ""
    quest_description: str = ""
    namespace: str = DEFAULT_QUEST_NAMESPACE
    mod_name: str = "Schedule 1 Quest Pack"
    mod_version: str = "1.0.0"
    mod_author: str = "Quest Creator"
    game_developer: str = "TVGS"
    game_name: str = "Schedule I"
    auto_begin: bool = True
    custom_icon: bool = False
    icon_file_name: str = ""
    quest_rewards: bool = True
    rewards: tuple[QuestReward, ...] = ()
    generate_data_class: bool = False
    data_class_fields: tuple[DataClassField, ...] = ()
    blueprint_type: BlueprintType = BlueprintType.STANDARD
    track_on_begin: bool = True
    auto_complete_on_all_entries_complete: bool = True
    objectives: tuple[QuestObjective, ...] = field(default_factory=_default_objectives)
    quest_triggers: tuple[QuestTrigger, ...] = ()
    quest_finish_triggers: tuple[QuestTrigger, ...] = ()

    @classmethod
    def advanced(cls, **kwargs) -> "QuestBlueprint":
        """Advanced blueprints start with a second default objective."""
        kwargs.setdefault(
            "objectives",
            _default_objectives()
            + (QuestObjective(name="objective_2", title="Advanced objective"),),
        )
        return cls(blueprint_type=BlueprintType.ADVANCED, **kwargs)

    @property
    def display_name(self) -> str:
        return self.quest_title or self.class_name

    @property
    def has_any_triggers(self) -> bool:
        return bool(
            self.quest_triggers
            or self.quest_finish_triggers
            or any(o.start_triggers or o.finish_triggers for o in self.objectives)
        )

    @property
    def grants_rewards(self) -> bool:
        return self.quest_rewards and len(self.rewards) > 0

    def with_objective(self, objective: QuestObjective) -> "QuestBlueprint":
        return replace(self, objectives=self.objectives + (objective,))


# === NPC side ===


@dataclass(frozen=True)
class AppearanceLayer:
    layer_path: str = ""
    color_hex: str = "#FFFFFFFF"


@dataclass(frozen=True)
class NpcAppearance:
    """Avatar sliders (0..1 unless noted), colors as #AARRGGBB and layer lists."""

    gender: float = 0.5
    height: float = 1.0
    weight: float = 0.5
    left_eye_top: float = 0.5
    left_eye_bottom: float = 0.5
    right_eye_top: float = 0.5
    right_eye_bottom: float = 0.5
    pupil_dilation: float = 0.5
    eyebrow_scale: float = 1.0
    eyebrow_thickness: float = 1.0
    eyebrow_resting_height: float = 0.0
    eyebrow_resting_angle: float = 0.0
    skin_color: str = "#FFD3B58F"
    left_eye_lid_color: str = "#FFD3B58F"
    right_eye_lid_color: str = "#FFD3B58F"
    eye_ball_tint: str = "#FFFFFFFF"
    hair_color: str = "#FF2D2013"
    hair_path: str = "Avatar/Hair/Spiky/Spiky"
    eyeball_material_identifier: str = "Default"
    face_layers: tuple[AppearanceLayer, ...] = ()
    body_layers: tuple[AppearanceLayer, ...] = ()
    accessory_layers: tuple[AppearanceLayer, ...] = ()


@dataclass(frozen=True)
class DrugAffinity:
    drug_type: str = "Marijuana"
    affinity_value: float = 0.0


@dataclass(frozen=True)
class CustomerDefaults:
    min_weekly_spending: float = 400.0
    max_weekly_spending: float = 900.0
    min_orders_per_week: int = 1
    max_orders_per_week: int = 3
    preferred_order_day: str = "Monday"
    order_time: int = 900
    customer_standards: str = "Moderate"
    allow_direct_approach: bool = True
    guarantee_first_sample: bool = False
    mutual_relation_min_at_50: float = 0.0
    mutual_relation_max_at_100: float = 0.0
    call_police_chance: float = 0.0
    base_addiction: float = 0.0
    dependence_multiplier: float = 1.0
    drug_affinities: tuple[DrugAffinity, ...] = ()
    preferred_properties: tuple[str, ...] = ()


@dataclass(frozen=True)
class DealerDefaults:
    signing_fee: float = 500.0
    commission_cut: float = 0.2
    dealer_type: str = "PlayerDealer"
    home_name: str = ""
    allow_insufficient_quality: bool = False
    allow_excess_quality: bool = True
    completed_deals_variable: str = ""


@dataclass(frozen=True)
class RelationshipDefaults:
    starting_delta: float = 0.0
    starts_unlocked: bool = False
    unlock_type: str = ""
    connections: tuple[str, ...] = ()

    @property
    def is_configured(self) -> bool:
        return (
            self.starting_delta != 0
            or self.starts_unlocked
            or bool(self.unlock_type.strip())
            or len(self.connections) > 0
        )


@dataclass(frozen=True)
class InventoryDefaults:
    startup_items: tuple[str, ...] = ()
    enable_random_cash: bool = False
    random_cash_min: int = 0
    random_cash_max: int = 0
    clear_inventory_each_night: bool = True

    @property
    def is_configured(self) -> bool:
        return (
            self.enable_random_cash
            or not self.clear_inventory_each_night
            or len(self.startup_items) > 0
        )


@dataclass(frozen=True)
class NpcBlueprint:
    class_name: str = "GeneratedNpc"
    namespace: str = DEFAULT_NPC_NAMESPACE
    npc_id: str = "npc_id"
    first_name: str = "New"
    last_name: str = "NPC"
    mod_name: str = "Schedule 1 NPC Pack"
    mod_author: str = "NPC Creator"
    mod_version: str = "1.0.0"
    game_developer: str = "TVGS"
    game_name: str = "Schedule I"
    is_physical: bool = True
    is_dealer: bool = False
    enable_customer: bool = True
    has_spawn_position: bool = False
    spawn_x: float = 0.0
    spawn_y: float = 0.0
    spawn_z: float = 0.0
    appearance: Optional[NpcAppearance] = field(default_factory=NpcAppearance)
    customer_defaults: CustomerDefaults = field(default_factory=CustomerDefaults)
    dealer_defaults: DealerDefaults = field(default_factory=DealerDefaults)
    relationship_defaults: RelationshipDefaults = field(
        default_factory=RelationshipDefaults
    )
    inventory_defaults: InventoryDefaults = field(default_factory=InventoryDefaults)
    schedule_actions: tuple[ScheduleAction, ...] = ()

    @property
    def display_name(self) -> str:
        full = f"{self.first_name} {self.last_name}".strip()
        return full or self.npc_id

    @property
    def is_customer_or_dealer(self) -> bool:
        return self.enable_customer or self.is_dealer
