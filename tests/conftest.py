"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient

from questsmith.core.blueprint.enums import FinishType, TriggerTarget, TriggerType
from questsmith.core.blueprint.models import (
    NpcBlueprint,
    QuestBlueprint,
    QuestObjective,
    QuestTrigger,
)
from questsmith.core.blueprint.schedule import (
    EnsureDealSignalAction,
    HandleDealAction,
    StayInBuildingAction,
    WalkToAction,
)
from questsmith.main import app


@pytest.fixture()
def client() -> TestClient:
    """FastAPI TestClient with the application lifespan running."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def deal_trigger() -> QuestTrigger:
    """NPC-instance trigger finishing objective 0 on a completed deal."""
    return QuestTrigger(
        trigger_type=TriggerType.NPC_EVENT_TRIGGER,
        target_action="NPCCustomer.OnDealCompleted",
        target_npc_id="bobby_cooley",
        trigger_target=TriggerTarget.OBJECTIVE_FINISH,
        objective_index=0,
        finish_type=FinishType.COMPLETE,
    )


@pytest.fixture()
def go_home_quest(deal_trigger: QuestTrigger) -> QuestBlueprint:
    """Two objectives sharing the name "go_home", the first finished by a deal."""
    return QuestBlueprint(
        class_name="GoHomeQuest",
        quest_id="go_home_quest",
        quest_title="Go Home",
        objectives=(
            QuestObjective(
                name="go_home", title="Head home", finish_triggers=(deal_trigger,)
            ),
            QuestObjective(name="go_home", title="Head home again"),
        ),
    )


@pytest.fixture()
def sample_npc() -> NpcBlueprint:
    return NpcBlueprint(
        class_name="BobbyCooley",
        npc_id="bobby_cooley",
        first_name="Bobby",
        last_name="Cooley",
        schedule_actions=(
            WalkToAction(start_time=700, position_x=1.0, position_y=2.0, position_z=3.0),
            StayInBuildingAction(start_time=900, building_name="NorthApartments"),
            EnsureDealSignalAction(),
            HandleDealAction(start_time=1800),
        ),
    )


@pytest.fixture()
def quest_document() -> dict:
    """Quest blueprint in the persisted project-file shape."""
    return {
        "className": "DeliveryRun",
        "questId": "delivery_run",
        "questTitle": "Delivery Run",
        "questDescription": "Bring the package to Kyle.",
        "questRewards": True,
        "questRewardsList": [{"rewardType": "Money", "amount": 250}],
        "objectives": [
            {
                "name": "pick_up",
                "title": "Pick up the package",
                "finishTriggers": [
                    {
                        "triggerType": "NPCEventTrigger",
                        "targetAction": "NPCCustomer.OnDealCompleted",
                        "targetNpcId": "KyleCooley",
                        "triggerTarget": "ObjectiveFinish",
                        "objectiveIndex": 0,
                    }
                ],
            },
            {"name": "deliver", "title": "Deliver it", "autoStart": False},
        ],
    }


@pytest.fixture()
def npc_document() -> dict:
    """NPC blueprint in the persisted project-file shape."""
    return {
        "className": "KyleCooley",
        "npcId": "KyleCooley",
        "firstName": "Kyle",
        "lastName": "Cooley",
        "isDealer": True,
        "customerDefaults": {
            "preferredOrderDay": "System.Windows.Controls.ComboBoxItem: Thursday",
        },
        "scheduleActions": [
            {
                "actionType": "StayInBuilding",
                "startTime": 800,
                "buildingName": "North Apartments (NorthApartments)",
            },
            {"actionType": "HandleDeal", "startTime": 1700},
        ],
    }
