"""Schedule action emitter

Writes the ``.WithSchedule(plan => { ... })`` section of an NPC prefab
chain, one ``plan.<Action>(...)`` call per stored action. Optional
arguments are passed by name and only when they differ from the framework
default. Actions that depend on a blank free-text identifier (building,
parking lot, vehicle, seat set) are written as a commented-out call.
"""

from typing import Callable, Optional

from questsmith.core.blueprint.enums import ScheduleActionType
from questsmith.core.blueprint.models import NpcBlueprint
from questsmith.core.blueprint.normalize import extract_type_name
from questsmith.core.blueprint.schedule import (
    DEFAULT_PARKING_ALIGNMENT,
    DEFAULT_STAY_DURATION,
    DEFAULT_WITHIN,
    NO_DIALOGUE_INDEX,
    DriveToCarParkAction,
    HandleDealAction,
    LocationDialogueAction,
    ScheduleAction,
    SitAtSeatSetAction,
    StayInBuildingAction,
    UseAtmAction,
    UseVendingMachineAction,
    WalkToAction,
)
from questsmith.core.codegen.code_builder import CodeBuilder
from questsmith.core.codegen.formatting import (
    bool_literal,
    float_literal,
    format_vector3,
    string_literal,
)
from questsmith.core.codegen.identifiers import make_identifier
from questsmith.core.logging import get_logger

logger = get_logger(__name__)


def emit(builder: CodeBuilder, npc: NpcBlueprint) -> None:
    """Write the schedule section; nothing at all when there are no actions."""
    if not npc.schedule_actions:
        return

    builder.append_source_comment("Npc.ScheduleActions[]")
    builder.open_block(".WithSchedule(plan =>")

    deal_signal_written = False
    for index, action in enumerate(npc.schedule_actions):
        builder.append_source_comment(
            f"ScheduleActions[{index}] - Type: {action.kind.value}, "
            f"StartTime: {action.start_time}"
        )

        if action.kind is ScheduleActionType.ENSURE_DEAL_SIGNAL:
            if npc.is_customer_or_dealer and not deal_signal_written:
                builder.append_line("plan.EnsureDealSignal();")
                deal_signal_written = True
            continue

        if action.kind is ScheduleActionType.HANDLE_DEAL and not npc.is_dealer:
            logger.debug("Dropping HandleDeal for non-dealer %s", npc.npc_id)
            continue

        line = _EMITTERS[action.kind](action)
        builder.append_line(line)

    builder.close_block()
    builder.append_line(")")


def action_line(action: ScheduleAction) -> Optional[str]:
    """The emitted line for a single action, or None for EnsureDealSignal."""
    emitter = _EMITTERS.get(action.kind)
    return emitter(action) if emitter else None


def _call(method: str, arguments: list[str]) -> str:
    return f"plan.{method}({', '.join(arguments)});"


def _with_name(arguments: list[str], action_name: str) -> list[str]:
    if action_name and action_name.strip():
        arguments.append(f"name: {string_literal(action_name)}")
    return arguments


def _facing_arguments(
    face_destination_dir: bool, within: float, warp_if_skipped: bool, more: bool
) -> list[str]:
    # faceDestinationDir precedes the other optionals, so it is spelled out
    # whenever any later named argument follows
    arguments = []
    if not face_destination_dir:
        arguments.append("faceDestinationDir: false")
    elif within != DEFAULT_WITHIN or warp_if_skipped or more:
        arguments.append("faceDestinationDir: true")
    if within != DEFAULT_WITHIN:
        arguments.append(f"within: {float_literal(within)}")
    if warp_if_skipped:
        arguments.append("warpIfSkipped: true")
    return arguments


# === Per variant ===


def _walk_to(action: WalkToAction) -> str:
    arguments = [
        format_vector3(action.position_x, action.position_y, action.position_z),
        str(action.start_time),
    ]
    arguments += _facing_arguments(
        action.face_destination_dir,
        action.within,
        action.warp_if_skipped,
        action.has_forward,
    )
    if action.has_forward:
        forward = format_vector3(action.forward_x, action.forward_y, action.forward_z)
        arguments.append(f"forward: {forward}")
    return _call("WalkTo", _with_name(arguments, action.action_name))


def _stay_in_building(action: StayInBuildingAction) -> str:
    type_name = extract_type_name(action.building_name)
    if not type_name:
        return f"// .StayInBuilding(building, {action.start_time}, {action.duration})"

    arguments = [
        f"Building.Get<{make_identifier(type_name, 'Building')}>()",
        str(action.start_time),
    ]
    if action.duration > 0 and action.duration != DEFAULT_STAY_DURATION:
        arguments.append(f"durationMinutes: {action.duration}")
    if action.door_index is not None:
        arguments.append(f"doorIndex: {action.door_index}")
    return _call("StayInBuilding", _with_name(arguments, action.action_name))


def _location_dialogue(action: LocationDialogueAction) -> str:
    has_greeting = action.greeting_override_to_enable != NO_DIALOGUE_INDEX
    has_choice = action.choice_to_enable != NO_DIALOGUE_INDEX

    arguments = [
        format_vector3(action.position_x, action.position_y, action.position_z),
        str(action.start_time),
    ]
    arguments += _facing_arguments(
        action.face_destination_dir,
        action.within,
        action.warp_if_skipped,
        has_greeting or has_choice,
    )
    if has_greeting:
        arguments.append(f"greetingOverrideToEnable: {action.greeting_override_to_enable}")
    if has_choice:
        arguments.append(f"choiceToEnable: {action.choice_to_enable}")
    return _call("LocationDialogue", _with_name(arguments, action.action_name))


def _use_vending_machine(action: UseVendingMachineAction) -> str:
    arguments = [str(action.start_time)]
    if action.machine_guid.strip():
        arguments.append(f"machineGUID: {string_literal(action.machine_guid)}")
    return _call("UseVendingMachine", _with_name(arguments, action.action_name))


def _drive_to_car_park(action: DriveToCarParkAction) -> str:
    alignment = make_identifier(action.parking_alignment, DEFAULT_PARKING_ALIGNMENT)
    if not action.parking_lot_name.strip() or not action.vehicle_id.strip():
        return (
            "// .DriveToCarParkWithCreateVehicle(parkingLot, vehicleId, "
            f"{action.start_time}, spawnPos, rotation, ParkingAlignment.{alignment})"
        )

    rotation = (
        f"Quaternion.Euler({float_literal(action.vehicle_rotation_x)}, "
        f"{float_literal(action.vehicle_rotation_y)}, "
        f"{float_literal(action.vehicle_rotation_z)})"
    )
    arguments = [
        string_literal(action.parking_lot_name),
        string_literal(action.vehicle_id),
        str(action.start_time),
        format_vector3(
            action.vehicle_spawn_x, action.vehicle_spawn_y, action.vehicle_spawn_z
        ),
        rotation,
    ]
    if alignment != DEFAULT_PARKING_ALIGNMENT:
        arguments.append(f"alignment: ParkingAlignment.{alignment}")
    if action.override_parking_type is not None:
        arguments.append(
            f"overrideParkingType: {bool_literal(action.override_parking_type)}"
        )
    return _call(
        "DriveToCarParkWithCreateVehicle", _with_name(arguments, action.action_name)
    )


def _use_atm(action: UseAtmAction) -> str:
    arguments = [str(action.start_time)]
    if action.atm_guid.strip():
        arguments.append(f"atmGUID: {string_literal(action.atm_guid)}")
    return _call("UseATM", _with_name(arguments, action.action_name))


def _handle_deal(action: HandleDealAction) -> str:
    return _call("HandleDeal", _with_name([str(action.start_time)], action.action_name))


def _sit_at_seat_set(action: SitAtSeatSetAction) -> str:
    if not action.seat_set_name.strip():
        return f"// .SitAtSeatSet(seatSetName, {action.start_time})"

    arguments = [string_literal(action.seat_set_name), str(action.start_time)]
    if action.warp_if_skipped:
        arguments.append("warpIfSkipped: true")
    return _call("SitAtSeatSet", _with_name(arguments, action.action_name))


_EMITTERS: dict[ScheduleActionType, Callable[..., str]] = {
    ScheduleActionType.WALK_TO: _walk_to,
    ScheduleActionType.STAY_IN_BUILDING: _stay_in_building,
    ScheduleActionType.LOCATION_DIALOGUE: _location_dialogue,
    ScheduleActionType.USE_VENDING_MACHINE: _use_vending_machine,
    ScheduleActionType.DRIVE_TO_CAR_PARK: _drive_to_car_park,
    ScheduleActionType.USE_ATM: _use_atm,
    ScheduleActionType.HANDLE_DEAL: _handle_deal,
    ScheduleActionType.SIT_AT_SEAT_SET: _sit_at_seat_set,
}
