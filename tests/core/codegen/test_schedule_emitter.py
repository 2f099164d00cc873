"""Schedule section emission tests"""

from dataclasses import replace

import pytest

from questsmith.core.blueprint.models import NpcBlueprint
from questsmith.core.blueprint.schedule import (
    DriveToCarParkAction,
    EnsureDealSignalAction,
    HandleDealAction,
    LocationDialogueAction,
    SitAtSeatSetAction,
    StayInBuildingAction,
    UseAtmAction,
    UseVendingMachineAction,
    WalkToAction,
)
from questsmith.core.codegen import schedule
from questsmith.core.codegen.code_builder import CodeBuilder


def _render(npc: NpcBlueprint) -> str:
    builder = CodeBuilder()
    schedule.emit(builder, npc)
    return builder.build()


class TestScheduleSection:
    """Section framing and filtering"""

    def test_no_actions_writes_nothing(self):
        assert _render(NpcBlueprint()) == "\n"

    def test_block_framing(self, sample_npc):
        lines = _render(sample_npc).splitlines()
        assert ".WithSchedule(plan =>" in lines
        assert lines[-2:] == ["}", ")"]

    def test_source_comment_per_action(self, sample_npc):
        source = _render(sample_npc)
        assert "// Generated from: ScheduleActions[0] - Type: WalkTo, StartTime: 700" in source

    def test_handle_deal_dropped_for_non_dealer(self, sample_npc):
        source = _render(sample_npc)
        assert "plan.HandleDeal(" not in source

    def test_handle_deal_kept_for_dealer(self, sample_npc):
        source = _render(replace(sample_npc, is_dealer=True))
        assert "plan.HandleDeal(1800);" in source

    def test_deal_signal_written_once(self, sample_npc):
        npc = replace(
            sample_npc,
            schedule_actions=sample_npc.schedule_actions + (EnsureDealSignalAction(),),
        )
        assert _render(npc).count("plan.EnsureDealSignal();") == 1

    def test_deal_signal_needs_customer_or_dealer(self, sample_npc):
        npc = replace(sample_npc, enable_customer=False, is_dealer=False)
        assert "plan.EnsureDealSignal();" not in _render(npc)

    def test_action_order_preserved(self, sample_npc):
        source = _render(sample_npc)
        assert source.index("plan.WalkTo(") < source.index("plan.StayInBuilding(")


class TestActionLines:
    """One plan call per variant"""

    @pytest.mark.parametrize(
        "action, expected",
        [
            (
                WalkToAction(start_time=800, position_x=1, position_y=2, position_z=3),
                "plan.WalkTo(new Vector3(1f, 2f, 3f), 800);",
            ),
            (
                WalkToAction(start_time=800, face_destination_dir=False),
                "plan.WalkTo(new Vector3(0f, 0f, 0f), 800, faceDestinationDir: false);",
            ),
            (
                WalkToAction(start_time=800, within=2.5, warp_if_skipped=True),
                "plan.WalkTo(new Vector3(0f, 0f, 0f), 800, faceDestinationDir: true, "
                "within: 2.5f, warpIfSkipped: true);",
            ),
            (
                StayInBuildingAction(start_time=900, building_name="NorthApartments"),
                "plan.StayInBuilding(Building.Get<NorthApartments>(), 900);",
            ),
            (
                StayInBuildingAction(
                    start_time=900,
                    building_name="North Apartments (NorthApartments)",
                    duration=120,
                    door_index=1,
                    action_name="nap",
                ),
                "plan.StayInBuilding(Building.Get<NorthApartments>(), 900, "
                'durationMinutes: 120, doorIndex: 1, name: "nap");',
            ),
            (
                StayInBuildingAction(start_time=900),
                "// .StayInBuilding(building, 900, 60)",
            ),
            (
                LocationDialogueAction(start_time=1000, choice_to_enable=2),
                "plan.LocationDialogue(new Vector3(0f, 0f, 0f), 1000, "
                "faceDestinationDir: true, choiceToEnable: 2);",
            ),
            (
                UseVendingMachineAction(start_time=900, machine_guid="abc"),
                'plan.UseVendingMachine(900, machineGUID: "abc");',
            ),
            (UseVendingMachineAction(start_time=900), "plan.UseVendingMachine(900);"),
            (
                DriveToCarParkAction(
                    start_time=900,
                    parking_lot_name="lot",
                    vehicle_id="veh",
                    vehicle_rotation_y=90,
                ),
                'plan.DriveToCarParkWithCreateVehicle("lot", "veh", 900, '
                "new Vector3(0f, 0f, 0f), Quaternion.Euler(0f, 90f, 0f));",
            ),
            (
                DriveToCarParkAction(
                    start_time=900,
                    parking_lot_name="lot",
                    vehicle_id="veh",
                    parking_alignment="RearToKerb",
                    override_parking_type=True,
                ),
                'plan.DriveToCarParkWithCreateVehicle("lot", "veh", 900, '
                "new Vector3(0f, 0f, 0f), Quaternion.Euler(0f, 0f, 0f), "
                "alignment: ParkingAlignment.RearToKerb, overrideParkingType: true);",
            ),
            (
                DriveToCarParkAction(start_time=900, vehicle_id="veh"),
                "// .DriveToCarParkWithCreateVehicle(parkingLot, vehicleId, 900, "
                "spawnPos, rotation, ParkingAlignment.FrontToKerb)",
            ),
            (UseAtmAction(start_time=900, atm_guid="g"), 'plan.UseATM(900, atmGUID: "g");'),
            (HandleDealAction(start_time=900), "plan.HandleDeal(900);"),
            (
                SitAtSeatSetAction(start_time=900, seat_set_name="bench", warp_if_skipped=True),
                'plan.SitAtSeatSet("bench", 900, warpIfSkipped: true);',
            ),
            (SitAtSeatSetAction(start_time=900), "// .SitAtSeatSet(seatSetName, 900)"),
        ],
    )
    def test_action_line(self, action, expected):
        assert schedule.action_line(action) == expected

    def test_deal_signal_has_no_line(self):
        assert schedule.action_line(EnsureDealSignalAction()) is None
