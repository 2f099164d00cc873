"""Trigger catalog

Closed set of events the target framework exposes, with the callback
signature each one delivers. The signature table decides both the handler
field's delegate type and the lambda parameter list, so the two never
disagree.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from questsmith.core.blueprint.enums import TriggerTarget, TriggerType
from questsmith.core.blueprint.models import QuestTrigger


class KnownEvent(str, Enum):
    TIME_DAY_PASS = "TimeManager.OnDayPass"
    TIME_WEEK_PASS = "TimeManager.OnWeekPass"
    TIME_SLEEP_START = "TimeManager.OnSleepStart"
    TIME_SLEEP_END = "TimeManager.OnSleepEnd"
    TIME_TICK = "TimeManager.OnTick"
    NPC_DEATH = "NPC.OnDeath"
    NPC_INVENTORY_CHANGED = "NPC.OnInventoryChanged"
    RELATIONSHIP_CHANGED = "NPCRelationship.OnChanged"
    RELATIONSHIP_UNLOCKED = "NPCRelationship.OnUnlocked"
    CUSTOMER_UNLOCKED = "NPCCustomer.OnUnlocked"
    CUSTOMER_DEAL_COMPLETED = "NPCCustomer.OnDealCompleted"
    CUSTOMER_CONTRACT_ASSIGNED = "NPCCustomer.OnContractAssigned"
    DEALER_RECRUITED = "NPCDealer.OnRecruited"
    DEALER_CONTRACT_ACCEPTED = "NPCDealer.OnContractAccepted"
    DEALER_RECOMMENDED = "NPCDealer.OnRecommended"
    PLAYER_DEATH = "Player.OnDeath"
    PLAYER_SPAWNED = "Player.PlayerSpawned"
    LOCAL_PLAYER_SPAWNED = "Player.LocalPlayerSpawned"
    PLAYER_DESPAWNED = "Player.PlayerDespawned"
    QUEST_COMPLETE = "Quest.OnComplete"
    QUEST_FAIL = "Quest.OnFail"
    QUEST_CANCEL = "Quest.OnCancel"
    QUEST_EXPIRE = "Quest.OnExpire"
    QUEST_BEGIN = "Quest.OnBegin"
    QUEST_ENTRY_COMPLETE = "QuestEntry.OnComplete"
    QUEST_ENTRY_BEGIN = "QuestEntry.OnBegin"

    @classmethod
    def lookup(cls, target_action: Optional[str]) -> Optional["KnownEvent"]:
        if not target_action:
            return None
        try:
            return cls(target_action.strip())
        except ValueError:
            return None


class ComponentKind(str, Enum):
    """Which object on an NPC instance owns the event."""

    NPC = "NPC"
    CUSTOMER = "NPCCustomer"
    DEALER = "NPCDealer"
    RELATIONSHIP = "NPCRelationship"

    @property
    def member_path(self) -> str:
        return {
            ComponentKind.NPC: "npc",
            ComponentKind.CUSTOMER: "npc.Customer",
            ComponentKind.DEALER: "npc.Dealer",
            ComponentKind.RELATIONSHIP: "npc.Relationship",
        }[self]

    @classmethod
    def from_component(cls, component: str) -> "ComponentKind":
        try:
            return cls(component)
        except ValueError:
            return cls.NPC


@dataclass(frozen=True)
class EventSignature:
    parameters: tuple[str, ...] = ()
    delegate_type: str = "Action"

    @property
    def lambda_parameters(self) -> str:
        return "(" + ", ".join(self.parameters) + ")"


NO_ARGS = EventSignature()
PLAYER_ARG = EventSignature(("player",), "Action<Player>")

_SIGNATURES: dict[KnownEvent, EventSignature] = {
    KnownEvent.RELATIONSHIP_CHANGED: EventSignature(("delta",), "Action<float>"),
    KnownEvent.RELATIONSHIP_UNLOCKED: EventSignature(
        ("type", "notify"), "Action<NPCRelationship.UnlockType, bool>"
    ),
    KnownEvent.CUSTOMER_CONTRACT_ASSIGNED: EventSignature(
        ("payment", "quantity", "windowStart", "windowEnd"),
        "Action<float, int, int, int>",
    ),
    KnownEvent.TIME_SLEEP_END: EventSignature(("minutes",), "Action<int>"),
    KnownEvent.PLAYER_SPAWNED: PLAYER_ARG,
    KnownEvent.LOCAL_PLAYER_SPAWNED: PLAYER_ARG,
    KnownEvent.PLAYER_DESPAWNED: PLAYER_ARG,
}


def signature_for(target_action: Optional[str]) -> EventSignature:
    """Callback signature for an event; unknown events take no arguments."""
    event = KnownEvent.lookup(target_action)
    if event is None:
        return NO_ARGS
    return _SIGNATURES.get(event, NO_ARGS)


# === Editor-facing registry ===


@dataclass(frozen=True)
class TriggerMetadata:
    trigger_type: TriggerType
    event: KnownEvent
    description: str
    source_class: str
    requires_npc_id: bool = False
    requires_quest_id: bool = False

    @property
    def target_action(self) -> str:
        return self.event.value

    @property
    def parameters(self) -> tuple[str, ...]:
        return signature_for(self.event.value).parameters


def _action(event: KnownEvent, description: str, source: str) -> TriggerMetadata:
    return TriggerMetadata(TriggerType.ACTION_TRIGGER, event, description, source)


def _npc(event: KnownEvent, description: str, source: str) -> TriggerMetadata:
    return TriggerMetadata(
        TriggerType.NPC_EVENT_TRIGGER, event, description, source, requires_npc_id=True
    )


def _quest(event: KnownEvent, description: str, source: str) -> TriggerMetadata:
    return TriggerMetadata(
        TriggerType.QUEST_EVENT_TRIGGER,
        event,
        description,
        source,
        requires_quest_id=True,
    )


_CATALOG: tuple[TriggerMetadata, ...] = (
    _action(KnownEvent.TIME_DAY_PASS, "Triggered when a new in-game day starts", "S1API.GameTime.TimeManager"),
    _action(KnownEvent.TIME_WEEK_PASS, "Triggered when a new in-game week starts", "S1API.GameTime.TimeManager"),
    _action(KnownEvent.TIME_SLEEP_START, "Triggered when the player starts sleeping", "S1API.GameTime.TimeManager"),
    _action(KnownEvent.TIME_SLEEP_END, "Triggered when the player finishes sleeping (parameter: minutes skipped)", "S1API.GameTime.TimeManager"),
    _action(KnownEvent.TIME_TICK, "Triggered at every tick of gametime", "S1API.GameTime.TimeManager"),
    _npc(KnownEvent.NPC_DEATH, "Triggered when an NPC dies", "S1API.Entities.NPC"),
    _npc(KnownEvent.NPC_INVENTORY_CHANGED, "Triggered when an NPC's inventory contents change", "S1API.Entities.NPC"),
    _npc(KnownEvent.RELATIONSHIP_CHANGED, "Triggered when an NPC's relationship delta changes (parameter: float delta)", "S1API.Entities.NPCRelationship"),
    _npc(KnownEvent.RELATIONSHIP_UNLOCKED, "Triggered when an NPC is unlocked (parameters: UnlockType type, bool notify)", "S1API.Entities.NPCRelationship"),
    _npc(KnownEvent.CUSTOMER_UNLOCKED, "Triggered when a customer NPC is unlocked", "S1API.Entities.NPCCustomer"),
    _npc(KnownEvent.CUSTOMER_DEAL_COMPLETED, "Triggered when a customer completes a deal", "S1API.Entities.NPCCustomer"),
    _npc(KnownEvent.CUSTOMER_CONTRACT_ASSIGNED, "Triggered when a contract is assigned to a customer (parameters: payment, quantity, windowStart, windowEnd)", "S1API.Entities.NPCCustomer"),
    _npc(KnownEvent.DEALER_RECRUITED, "Triggered when a dealer NPC is recruited", "S1API.Entities.NPCDealer"),
    _npc(KnownEvent.DEALER_CONTRACT_ACCEPTED, "Triggered when a dealer accepts a contract", "S1API.Entities.NPCDealer"),
    _npc(KnownEvent.DEALER_RECOMMENDED, "Triggered when a dealer is recommended", "S1API.Entities.NPCDealer"),
    _action(KnownEvent.PLAYER_DEATH, "Triggered when the local player dies", "S1API.Entities.Player"),
    _action(KnownEvent.PLAYER_SPAWNED, "Triggered when any player spawns (parameter: Player player)", "S1API.Entities.Player"),
    _action(KnownEvent.LOCAL_PLAYER_SPAWNED, "Triggered when the local player spawns (parameter: Player player)", "S1API.Entities.Player"),
    _action(KnownEvent.PLAYER_DESPAWNED, "Triggered when any player despawns (parameter: Player player)", "S1API.Entities.Player"),
    _quest(KnownEvent.QUEST_COMPLETE, "Triggered when a quest completes", "S1API.Quests.Quest"),
    _quest(KnownEvent.QUEST_FAIL, "Triggered when a quest fails", "S1API.Quests.Quest"),
    _quest(KnownEvent.QUEST_CANCEL, "Triggered when a quest is cancelled", "S1API.Quests.Quest"),
    _quest(KnownEvent.QUEST_EXPIRE, "Triggered when a quest expires", "S1API.Quests.Quest"),
    _quest(KnownEvent.QUEST_BEGIN, "Triggered when a quest begins", "S1API.Quests.Quest"),
    _quest(KnownEvent.QUEST_ENTRY_COMPLETE, "Triggered when a quest entry/objective completes", "S1API.Quests.QuestEntry"),
    _quest(KnownEvent.QUEST_ENTRY_BEGIN, "Triggered when a quest entry/objective begins", "S1API.Quests.QuestEntry"),
)

_NPC_COMPONENTS = tuple(f"{kind.value}." for kind in ComponentKind)


def available_triggers() -> list[TriggerMetadata]:
    return list(_CATALOG)


def npc_triggers() -> list[TriggerMetadata]:
    return [
        t
        for t in _CATALOG
        if t.trigger_type is TriggerType.NPC_EVENT_TRIGGER
        or t.target_action.startswith(_NPC_COMPONENTS)
    ]


def quest_triggers() -> list[TriggerMetadata]:
    return [
        t
        for t in _CATALOG
        if t.trigger_type is TriggerType.QUEST_EVENT_TRIGGER
        or t.target_action.startswith(("Quest.", "QuestEntry."))
    ]


def validate_trigger(trigger: Optional[QuestTrigger]) -> bool:
    """Whether a trigger is fully configured and names a catalogued event."""
    if trigger is None or not trigger.target_action.strip():
        return False
    if (
        trigger.trigger_type is TriggerType.NPC_EVENT_TRIGGER
        and not trigger.target_npc_id.strip()
    ):
        return False
    if (
        trigger.trigger_type is TriggerType.QUEST_EVENT_TRIGGER
        and not trigger.target_quest_id.strip()
    ):
        return False
    if (
        trigger.trigger_target
        in (TriggerTarget.OBJECTIVE_START, TriggerTarget.OBJECTIVE_FINISH)
        and trigger.objective_index is None
    ):
        return False
    return KnownEvent.lookup(trigger.target_action) is not None
