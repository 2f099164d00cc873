"""Persisted document -> blueprint snapshot

Reads the camelCase JSON shape written by the editor's project files.
Unknown keys are ignored and missing keys take the model defaults. All
backward-compatibility repairs from ``normalize`` are applied here.
"""

import math
from collections.abc import Mapping
from typing import Any, Callable, Optional, TypeVar

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
from questsmith.core.blueprint.normalize import (
    coerce_enum,
    extract_type_name,
    migrate_npc_id,
    normalize_hex,
    strip_ui_prefix,
)
from questsmith.core.blueprint.schedule import (
    ACTION_CLASSES,
    DEFAULT_PARKING_ALIGNMENT,
    DriveToCarParkAction,
    LocationDialogueAction,
    ScheduleAction,
    SitAtSeatSetAction,
    StayInBuildingAction,
    UseAtmAction,
    UseVendingMachineAction,
    WalkToAction,
)
from questsmith.core.codegen.errors import BlueprintLoadError
from questsmith.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


# === Field readers ===


def _require_mapping(data: Any, what: str) -> Mapping:
    if not isinstance(data, Mapping):
        raise BlueprintLoadError(
            f"{what} must be a JSON object, got {type(data).__name__}"
        )
    return data


def _list(data: Mapping, key: str) -> list:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise BlueprintLoadError(f"'{key}' must be a list")
    return value


def _str(data: Mapping, key: str, default: str = "") -> str:
    value = data.get(key)
    if value is None:
        return default
    return str(value)


def _bool(data: Mapping, key: str, default: bool) -> bool:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise BlueprintLoadError(f"'{key}' must be a boolean, got {value!r}")


def _number(data: Mapping, key: str, default: T, cast: Callable[[Any], T]) -> T:
    value = data.get(key)
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise BlueprintLoadError(f"'{key}' must be numeric, got {value!r}")
    try:
        return cast(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise BlueprintLoadError(f"'{key}' must be numeric, got {value!r}") from e


def _int(data: Mapping, key: str, default: int) -> int:
    return _number(data, key, default, lambda v: int(float(v)))


def _float(data: Mapping, key: str, default: float) -> float:
    value = _number(data, key, default, float)
    if not math.isfinite(value):
        raise BlueprintLoadError(f"'{key}' must be a finite number, got {value!r}")
    return value


def _optional_int(data: Mapping, key: str) -> Optional[int]:
    if data.get(key) is None:
        return None
    return _int(data, key, 0)


def _optional_bool(data: Mapping, key: str) -> Optional[bool]:
    if data.get(key) is None:
        return None
    return _bool(data, key, False)


def _enum(data: Mapping, key: str, enum_cls: type, default: Any) -> Any:
    raw = data.get(key)
    member = coerce_enum(enum_cls, raw, default)
    if member is None:
        raise BlueprintLoadError(
            f"'{key}' has unrecognized {enum_cls.__name__} value {raw!r}"
        )
    return member


def _choice(data: Mapping, key: str, default: str) -> str:
    """Enum-like free text stored by combo boxes."""
    value = strip_ui_prefix(_str(data, key, default))
    return value or default


def _str_tuple(data: Mapping, key: str) -> tuple[str, ...]:
    return tuple(str(v) for v in _list(data, key) if v is not None and str(v).strip())


# === Quest documents ===


def trigger_from_dict(data: Any) -> QuestTrigger:
    data = _require_mapping(data, "trigger")
    return QuestTrigger(
        trigger_type=_enum(data, "triggerType", TriggerType, TriggerType.ACTION_TRIGGER),
        target_action=_str(data, "targetAction").strip(),
        target_npc_id=migrate_npc_id(_str(data, "targetNpcId")),
        target_quest_id=_str(data, "targetQuestId").strip(),
        target_quest_entry_index=_optional_int(data, "targetQuestEntryIndex"),
        trigger_target=_enum(
            data, "triggerTarget", TriggerTarget, TriggerTarget.QUEST_START
        ),
        objective_index=_optional_int(data, "objectiveIndex"),
        finish_type=_enum(data, "finishType", FinishType, FinishType.COMPLETE),
    )


def objective_from_dict(data: Any) -> QuestObjective:
    data = _require_mapping(data, "objective")
    return QuestObjective(
        name=_str(data, "name"),
        title=_str(data, "title"),
        required_progress=_int(data, "requiredProgress", 1),
        has_location=_bool(data, "hasLocation", False),
        location_x=_float(data, "locationX", 0.0),
        location_y=_float(data, "locationY", 0.0),
        location_z=_float(data, "locationZ", 0.0),
        create_poi=_bool(data, "createPOI", True),
        auto_start=_bool(data, "autoStart", True),
        start_triggers=tuple(trigger_from_dict(t) for t in _list(data, "startTriggers")),
        finish_triggers=tuple(
            trigger_from_dict(t) for t in _list(data, "finishTriggers")
        ),
    )


def reward_from_dict(data: Any) -> QuestReward:
    data = _require_mapping(data, "reward")
    return QuestReward(
        reward_type=_enum(data, "rewardType", RewardType, RewardType.MONEY),
        amount=_int(data, "amount", 100),
        item_id=_str(data, "itemId").strip(),
        quantity=_int(data, "quantity", 1),
    )


def data_field_from_dict(data: Any) -> DataClassField:
    data = _require_mapping(data, "data class field")
    return DataClassField(
        field_name=_str(data, "fieldName").strip(),
        field_type=_enum(data, "fieldType", DataFieldType, DataFieldType.BOOL),
        default_value=_str(data, "defaultValue"),
        comment=_str(data, "comment"),
    )


def quest_from_dict(data: Any) -> QuestBlueprint:
    """Build a ``QuestBlueprint`` from a persisted quest document."""
    data = _require_mapping(data, "quest blueprint")

    blueprint_type = _enum(data, "blueprintType", BlueprintType, BlueprintType.STANDARD)
    base = (
        QuestBlueprint.advanced()
        if blueprint_type is BlueprintType.ADVANCED
        else QuestBlueprint()
    )

    objectives = base.objectives
    if "objectives" in data:
        objectives = tuple(objective_from_dict(o) for o in _list(data, "objectives"))

    quest_rewards = _bool(data, "questRewards", True)
    rewards = tuple(reward_from_dict(r) for r in _list(data, "questRewardsList"))
    if quest_rewards and not rewards:
        logger.debug("Legacy quest document: adding default money reward")
        rewards = (QuestReward(reward_type=RewardType.MONEY, amount=100),)

    quest = QuestBlueprint(
        class_name=_str(data, "className").strip(),
        quest_id=_str(data, "questId").strip(),
        quest_title=_str(data, "questTitle"),
        quest_description=_str(data, "questDescription"),
        namespace=_str(data, "namespace", base.namespace),
        mod_name=_str(data, "modName", base.mod_name),
        mod_version=_str(data, "modVersion", base.mod_version),
        mod_author=_str(data, "modAuthor", base.mod_author),
        game_developer=_str(data, "gameDeveloper", base.game_developer),
        game_name=_str(data, "gameName", base.game_name),
        auto_begin=_bool(data, "autoBegin", True),
        custom_icon=_bool(data, "customIcon", False),
        icon_file_name=_str(data, "iconFileName").strip(),
        quest_rewards=quest_rewards,
        rewards=rewards,
        generate_data_class=_bool(data, "generateDataClass", False),
        data_class_fields=tuple(
            data_field_from_dict(f) for f in _list(data, "dataClassFields")
        ),
        blueprint_type=blueprint_type,
        track_on_begin=_bool(data, "trackOnBegin", True),
        auto_complete_on_all_entries_complete=_bool(
            data, "autoCompleteOnAllEntriesComplete", True
        ),
        objectives=objectives,
        quest_triggers=tuple(trigger_from_dict(t) for t in _list(data, "questTriggers")),
        quest_finish_triggers=tuple(
            trigger_from_dict(t) for t in _list(data, "questFinishTriggers")
        ),
    )
    logger.debug(
        "Loaded quest document: %s (%d objectives)",
        quest.class_name or "<unnamed>",
        len(quest.objectives),
    )
    return quest


# === NPC documents ===


def _layers(data: Mapping, key: str) -> tuple[AppearanceLayer, ...]:
    layers = []
    for raw in _list(data, key):
        layer = _require_mapping(raw, "appearance layer")
        path = _str(layer, "path", _str(layer, "layerPath")).strip()
        if not path:
            continue
        color = _str(layer, "color", _str(layer, "colorHex"))
        layers.append(AppearanceLayer(layer_path=path, color_hex=normalize_hex(color)))
    return tuple(layers)


def appearance_from_dict(data: Any) -> NpcAppearance:
    data = _require_mapping(data, "appearance")
    d = NpcAppearance()
    return NpcAppearance(
        gender=_float(data, "gender", d.gender),
        height=_float(data, "height", d.height),
        weight=_float(data, "weight", d.weight),
        left_eye_top=_float(data, "leftEye", _float(data, "leftEyeTop", d.left_eye_top)),
        left_eye_bottom=_float(data, "leftEyeBottom", d.left_eye_bottom),
        right_eye_top=_float(data, "rightEyeTop", d.right_eye_top),
        right_eye_bottom=_float(data, "rightEyeBottom", d.right_eye_bottom),
        pupil_dilation=_float(data, "pupilDilation", d.pupil_dilation),
        eyebrow_scale=_float(data, "eyebrowScale", d.eyebrow_scale),
        eyebrow_thickness=_float(data, "eyebrowThickness", d.eyebrow_thickness),
        eyebrow_resting_height=_float(
            data, "eyebrowRestingHeight", d.eyebrow_resting_height
        ),
        eyebrow_resting_angle=_float(
            data, "eyebrowRestingAngle", d.eyebrow_resting_angle
        ),
        skin_color=normalize_hex(_str(data, "skinColor"), d.skin_color),
        left_eye_lid_color=normalize_hex(
            _str(data, "leftEyeLidColor"), d.left_eye_lid_color
        ),
        right_eye_lid_color=normalize_hex(
            _str(data, "rightEyeLidColor"), d.right_eye_lid_color
        ),
        eye_ball_tint=normalize_hex(_str(data, "eyeBallTint"), d.eye_ball_tint),
        hair_color=normalize_hex(_str(data, "hairColor"), d.hair_color),
        hair_path=_str(data, "hairPath", d.hair_path),
        eyeball_material_identifier=_str(
            data, "eyeballMaterialId", d.eyeball_material_identifier
        ),
        face_layers=_layers(data, "faceLayers"),
        body_layers=_layers(data, "bodyLayers"),
        accessory_layers=_layers(data, "accessoryLayers"),
    )


def customer_defaults_from_dict(data: Any) -> CustomerDefaults:
    data = _require_mapping(data, "customer defaults")
    d = CustomerDefaults()
    affinities = []
    for raw in _list(data, "drugAffinities"):
        item = _require_mapping(raw, "drug affinity")
        affinities.append(
            DrugAffinity(
                drug_type=_choice(item, "drugType", "Marijuana"),
                affinity_value=_float(item, "affinityValue", 0.0),
            )
        )
    return CustomerDefaults(
        min_weekly_spending=_float(data, "minWeeklySpending", d.min_weekly_spending),
        max_weekly_spending=_float(data, "maxWeeklySpending", d.max_weekly_spending),
        min_orders_per_week=_int(data, "minOrdersPerWeek", d.min_orders_per_week),
        max_orders_per_week=_int(data, "maxOrdersPerWeek", d.max_orders_per_week),
        preferred_order_day=_choice(data, "preferredOrderDay", d.preferred_order_day),
        order_time=_int(data, "orderTime", d.order_time),
        customer_standards=_choice(data, "customerStandards", d.customer_standards),
        allow_direct_approach=_bool(data, "allowDirectApproach", True),
        guarantee_first_sample=_bool(data, "guaranteeFirstSample", False),
        mutual_relation_min_at_50=_float(data, "mutualRelationMinAt50", 0.0),
        mutual_relation_max_at_100=_float(data, "mutualRelationMaxAt100", 0.0),
        call_police_chance=_float(data, "callPoliceChance", 0.0),
        base_addiction=_float(data, "baseAddiction", 0.0),
        dependence_multiplier=_float(data, "dependenceMultiplier", 1.0),
        drug_affinities=tuple(affinities),
        preferred_properties=tuple(
            strip_ui_prefix(p) for p in _str_tuple(data, "preferredProperties")
        ),
    )


def dealer_defaults_from_dict(data: Any) -> DealerDefaults:
    data = _require_mapping(data, "dealer defaults")
    d = DealerDefaults()
    return DealerDefaults(
        signing_fee=_float(data, "signingFee", d.signing_fee),
        commission_cut=_float(data, "commissionCut", d.commission_cut),
        dealer_type=_choice(data, "dealerType", d.dealer_type),
        home_name=_str(data, "homeName").strip(),
        allow_insufficient_quality=_bool(data, "allowInsufficientQuality", False),
        allow_excess_quality=_bool(data, "allowExcessQuality", True),
        completed_deals_variable=_str(data, "completedDealsVariable").strip(),
    )


def relationship_defaults_from_dict(data: Any) -> RelationshipDefaults:
    data = _require_mapping(data, "relationship defaults")
    return RelationshipDefaults(
        starting_delta=_float(data, "startingDelta", 0.0),
        starts_unlocked=_bool(data, "startsUnlocked", False),
        unlock_type=strip_ui_prefix(_str(data, "unlockType")),
        connections=tuple(migrate_npc_id(c) for c in _str_tuple(data, "connections")),
    )


def inventory_defaults_from_dict(data: Any) -> InventoryDefaults:
    data = _require_mapping(data, "inventory defaults")
    return InventoryDefaults(
        startup_items=_str_tuple(data, "startupItems"),
        enable_random_cash=_bool(data, "enableRandomCash", False),
        random_cash_min=_int(data, "randomCashMin", 0),
        random_cash_max=_int(data, "randomCashMax", 0),
        clear_inventory_each_night=_bool(data, "clearInventoryEachNight", True),
    )


def schedule_action_from_dict(data: Any) -> ScheduleAction:
    data = _require_mapping(data, "schedule action")
    kind = _enum(data, "actionType", ScheduleActionType, ScheduleActionType.WALK_TO)
    common = {
        "start_time": _int(data, "startTime", 900),
        "action_name": _str(data, "actionName").strip(),
    }

    if kind is ScheduleActionType.WALK_TO:
        return WalkToAction(
            **common,
            position_x=_float(data, "positionX", 0.0),
            position_y=_float(data, "positionY", 0.0),
            position_z=_float(data, "positionZ", 0.0),
            face_destination_dir=_bool(data, "faceDestinationDirection", True),
            within=_float(data, "within", 1.0),
            warp_if_skipped=_bool(data, "warpIfSkipped", False),
            has_forward=_bool(data, "hasForward", False),
            forward_x=_float(data, "forwardX", 0.0),
            forward_y=_float(data, "forwardY", 0.0),
            forward_z=_float(data, "forwardZ", 0.0),
        )
    if kind is ScheduleActionType.STAY_IN_BUILDING:
        return StayInBuildingAction(
            **common,
            building_name=extract_type_name(_str(data, "buildingName")),
            duration=_int(data, "duration", 60),
            door_index=_optional_int(data, "doorIndex"),
        )
    if kind is ScheduleActionType.LOCATION_DIALOGUE:
        return LocationDialogueAction(
            **common,
            position_x=_float(data, "positionX", 0.0),
            position_y=_float(data, "positionY", 0.0),
            position_z=_float(data, "positionZ", 0.0),
            face_destination_dir=_bool(data, "faceDestinationDirection", True),
            within=_float(data, "within", 1.0),
            warp_if_skipped=_bool(data, "warpIfSkipped", False),
            greeting_override_to_enable=_int(data, "greetingOverrideToEnable", -1),
            choice_to_enable=_int(data, "choiceToEnable", -1),
        )
    if kind is ScheduleActionType.USE_VENDING_MACHINE:
        return UseVendingMachineAction(
            **common, machine_guid=_str(data, "machineGUID").strip()
        )
    if kind is ScheduleActionType.DRIVE_TO_CAR_PARK:
        return DriveToCarParkAction(
            **common,
            parking_lot_name=_str(data, "parkingLotName").strip(),
            vehicle_id=_str(data, "vehicleId").strip(),
            vehicle_spawn_x=_float(data, "vehicleSpawnX", 0.0),
            vehicle_spawn_y=_float(data, "vehicleSpawnY", 0.0),
            vehicle_spawn_z=_float(data, "vehicleSpawnZ", 0.0),
            vehicle_rotation_x=_float(data, "vehicleRotationX", 0.0),
            vehicle_rotation_y=_float(data, "vehicleRotationY", 0.0),
            vehicle_rotation_z=_float(data, "vehicleRotationZ", 0.0),
            parking_alignment=_choice(
                data, "parkingAlignment", DEFAULT_PARKING_ALIGNMENT
            ),
            override_parking_type=_optional_bool(data, "overrideParkingType"),
        )
    if kind is ScheduleActionType.USE_ATM:
        return UseAtmAction(**common, atm_guid=_str(data, "atmGUID").strip())
    if kind is ScheduleActionType.SIT_AT_SEAT_SET:
        return SitAtSeatSetAction(
            **common,
            seat_set_name=_str(data, "seatSetName").strip(),
            warp_if_skipped=_bool(data, "warpIfSkipped", False),
        )
    # HandleDeal and EnsureDealSignal carry only the common fields
    return ACTION_CLASSES[kind](**common)


def npc_from_dict(data: Any) -> NpcBlueprint:
    """Build an ``NpcBlueprint`` from a persisted NPC document."""
    data = _require_mapping(data, "NPC blueprint")
    d = NpcBlueprint()

    def _section(key: str, reader: Callable[[Any], T], default: T) -> T:
        raw = data.get(key)
        return default if raw is None else reader(raw)

    npc = NpcBlueprint(
        class_name=_str(data, "className", d.class_name).strip(),
        namespace=_str(data, "namespace", d.namespace),
        npc_id=migrate_npc_id(_str(data, "npcId", d.npc_id)),
        first_name=_str(data, "firstName", d.first_name),
        last_name=_str(data, "lastName", d.last_name),
        mod_name=_str(data, "modName", d.mod_name),
        mod_author=_str(data, "modAuthor", d.mod_author),
        mod_version=_str(data, "modVersion", d.mod_version),
        game_developer=_str(data, "gameDeveloper", d.game_developer),
        game_name=_str(data, "gameName", d.game_name),
        is_physical=_bool(data, "isPhysical", True),
        is_dealer=_bool(data, "isDealer", False),
        enable_customer=_bool(data, "enableCustomer", True),
        has_spawn_position=_bool(data, "hasSpawnPosition", False),
        spawn_x=_float(data, "spawnX", 0.0),
        spawn_y=_float(data, "spawnY", 0.0),
        spawn_z=_float(data, "spawnZ", 0.0),
        appearance=_section("appearance", appearance_from_dict, d.appearance),
        customer_defaults=_section(
            "customerDefaults", customer_defaults_from_dict, d.customer_defaults
        ),
        dealer_defaults=_section(
            "dealerDefaults", dealer_defaults_from_dict, d.dealer_defaults
        ),
        relationship_defaults=_section(
            "relationshipDefaults",
            relationship_defaults_from_dict,
            d.relationship_defaults,
        ),
        inventory_defaults=_section(
            "inventoryDefaults", inventory_defaults_from_dict, d.inventory_defaults
        ),
        schedule_actions=tuple(
            schedule_action_from_dict(a) for a in _list(data, "scheduleActions")
        ),
    )
    logger.debug(
        "Loaded NPC document: %s (%d schedule actions)",
        npc.npc_id,
        len(npc.schedule_actions),
    )
    return npc
