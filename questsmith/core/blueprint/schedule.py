"""NPC schedule actions, one immutable record per variant."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional, Union

from questsmith.core.blueprint.enums import ScheduleActionType

DEFAULT_WITHIN = 1.0
DEFAULT_STAY_DURATION = 60
DEFAULT_PARKING_ALIGNMENT = "FrontToKerb"
NO_DIALOGUE_INDEX = -1


@dataclass(frozen=True)
class WalkToAction:
    kind: ClassVar[ScheduleActionType] = ScheduleActionType.WALK_TO

    start_time: int = 900  # HHMM
    action_name: str = ""
    position_x: float = 0.0
    position_y: float = 0.0
    position_z: float = 0.0
    face_destination_dir: bool = True
    within: float = DEFAULT_WITHIN
    warp_if_skipped: bool = False
    has_forward: bool = False
    forward_x: float = 0.0
    forward_y: float = 0.0
    forward_z: float = 0.0


@dataclass(frozen=True)
class StayInBuildingAction:
    kind: ClassVar[ScheduleActionType] = ScheduleActionType.STAY_IN_BUILDING

    start_time: int = 900
    action_name: str = ""
    building_name: str = ""  # S1API building type name, e.g. "NorthApartments"
    duration: int = DEFAULT_STAY_DURATION
    door_index: Optional[int] = None


@dataclass(frozen=True)
class LocationDialogueAction:
    kind: ClassVar[ScheduleActionType] = ScheduleActionType.LOCATION_DIALOGUE

    start_time: int = 900
    action_name: str = ""
    position_x: float = 0.0
    position_y: float = 0.0
    position_z: float = 0.0
    face_destination_dir: bool = True
    within: float = DEFAULT_WITHIN
    warp_if_skipped: bool = False
    greeting_override_to_enable: int = NO_DIALOGUE_INDEX
    choice_to_enable: int = NO_DIALOGUE_INDEX


@dataclass(frozen=True)
class UseVendingMachineAction:
    kind: ClassVar[ScheduleActionType] = ScheduleActionType.USE_VENDING_MACHINE

    start_time: int = 900
    action_name: str = ""
    machine_guid: str = ""


@dataclass(frozen=True)
class DriveToCarParkAction:
    kind: ClassVar[ScheduleActionType] = ScheduleActionType.DRIVE_TO_CAR_PARK

    start_time: int = 900
    action_name: str = ""
    parking_lot_name: str = ""
    vehicle_id: str = ""
    vehicle_spawn_x: float = 0.0
    vehicle_spawn_y: float = 0.0
    vehicle_spawn_z: float = 0.0
    vehicle_rotation_x: float = 0.0
    vehicle_rotation_y: float = 0.0
    vehicle_rotation_z: float = 0.0
    parking_alignment: str = DEFAULT_PARKING_ALIGNMENT
    override_parking_type: Optional[bool] = None


@dataclass(frozen=True)
class UseAtmAction:
    kind: ClassVar[ScheduleActionType] = ScheduleActionType.USE_ATM

    start_time: int = 900
    action_name: str = ""
    atm_guid: str = ""


@dataclass(frozen=True)
class HandleDealAction:
    kind: ClassVar[ScheduleActionType] = ScheduleActionType.HANDLE_DEAL

    start_time: int = 900
    action_name: str = ""


@dataclass(frozen=True)
class SitAtSeatSetAction:
    kind: ClassVar[ScheduleActionType] = ScheduleActionType.SIT_AT_SEAT_SET

    start_time: int = 900
    action_name: str = ""
    seat_set_name: str = ""
    warp_if_skipped: bool = False


@dataclass(frozen=True)
class EnsureDealSignalAction:
    kind: ClassVar[ScheduleActionType] = ScheduleActionType.ENSURE_DEAL_SIGNAL

    start_time: int = 0
    action_name: str = ""


ScheduleAction = Union[
    WalkToAction,
    StayInBuildingAction,
    LocationDialogueAction,
    UseVendingMachineAction,
    DriveToCarParkAction,
    UseAtmAction,
    HandleDealAction,
    SitAtSeatSetAction,
    EnsureDealSignalAction,
]

ACTION_CLASSES: dict[ScheduleActionType, type] = {
    cls.kind: cls
    for cls in (
        WalkToAction,
        StayInBuildingAction,
        LocationDialogueAction,
        UseVendingMachineAction,
        DriveToCarParkAction,
        UseAtmAction,
        HandleDealAction,
        SitAtSeatSetAction,
        EnsureDealSignalAction,
    )
}
