"""Blueprint enumerations"""

from enum import Enum


class BlueprintType(str, Enum):
    STANDARD = "Standard"
    ADVANCED = "Advanced"


class TriggerType(str, Enum):
    ACTION_TRIGGER = "ActionTrigger"  # static class-level event
    NPC_EVENT_TRIGGER = "NPCEventTrigger"  # event on a specific NPC instance
    QUEST_EVENT_TRIGGER = "QuestEventTrigger"  # event on another quest instance
    CUSTOM_TRIGGER = "CustomTrigger"


class TriggerTarget(str, Enum):
    QUEST_START = "QuestStart"
    QUEST_FINISH = "QuestFinish"
    OBJECTIVE_START = "ObjectiveStart"
    OBJECTIVE_FINISH = "ObjectiveFinish"


class FinishType(str, Enum):
    COMPLETE = "Complete"
    FAIL = "Fail"
    CANCEL = "Cancel"
    EXPIRE = "Expire"

    @property
    def method_call(self) -> str:
        return f"{self.value}()"


class DataFieldType(str, Enum):
    BOOL = "Bool"
    INT = "Int"
    FLOAT = "Float"
    STRING = "String"
    LIST_STRING = "ListString"


class RewardType(str, Enum):
    XP = "XP"
    MONEY = "Money"
    ITEM = "Item"


class ScheduleActionType(str, Enum):
    WALK_TO = "WalkTo"
    STAY_IN_BUILDING = "StayInBuilding"
    LOCATION_DIALOGUE = "LocationDialogue"
    USE_VENDING_MACHINE = "UseVendingMachine"
    DRIVE_TO_CAR_PARK = "DriveToCarPark"
    USE_ATM = "UseATM"
    HANDLE_DEAL = "HandleDeal"
    SIT_AT_SEAT_SET = "SitAtSeatSet"
    ENSURE_DEAL_SIGNAL = "EnsureDealSignal"
