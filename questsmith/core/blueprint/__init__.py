"""Blueprint domain package

Public API:
- Enums: BlueprintType, TriggerType, TriggerTarget, FinishType, DataFieldType,
  RewardType, ScheduleActionType
- Quest snapshots: QuestBlueprint, QuestObjective, QuestTrigger, QuestReward,
  DataClassField
- NPC snapshots: NpcBlueprint, NpcAppearance, AppearanceLayer, DrugAffinity,
  CustomerDefaults, DealerDefaults, RelationshipDefaults, InventoryDefaults
- Schedule actions: one record per variant, ScheduleAction union

Document loading lives in ``questsmith.core.blueprint.loader``.
"""

from questsmith.core.blueprint.enums import (
    BlueprintType,
    DataFieldType,
    FinishType,
    RewardType,
    ScheduleActionType,
    TriggerTarget,
    TriggerType,
)
from questsmith.core.blueprint.models import (
    AppearanceLayer,
    CustomerDefaults,
    DataClassField,
    DealerDefaults,
    DrugAffinity,
    InventoryDefaults,
    NpcAppearance,
    NpcBlueprint,
    QuestBlueprint,
    QuestObjective,
    QuestReward,
    QuestTrigger,
    RelationshipDefaults,
)
from questsmith.core.blueprint.schedule import (
    DriveToCarParkAction,
    EnsureDealSignalAction,
    HandleDealAction,
    LocationDialogueAction,
    ScheduleAction,
    SitAtSeatSetAction,
    StayInBuildingAction,
    UseAtmAction,
    UseVendingMachineAction,
    WalkToAction,
)

__all__ = [
    # enums
    "BlueprintType",
    "DataFieldType",
    "FinishType",
    "RewardType",
    "ScheduleActionType",
    "TriggerTarget",
    "TriggerType",
    # quest
    "DataClassField",
    "QuestBlueprint",
    "QuestObjective",
    "QuestReward",
    "QuestTrigger",
    # npc
    "AppearanceLayer",
    "CustomerDefaults",
    "DealerDefaults",
    "DrugAffinity",
    "InventoryDefaults",
    "NpcAppearance",
    "NpcBlueprint",
    "RelationshipDefaults",
    # schedule
    "DriveToCarParkAction",
    "EnsureDealSignalAction",
    "HandleDealAction",
    "LocationDialogueAction",
    "ScheduleAction",
    "SitAtSeatSetAction",
    "StayInBuildingAction",
    "UseAtmAction",
    "UseVendingMachineAction",
    "WalkToAction",
]
