"""Tests for saving goals and contributions."""
import pytest

from models.saving_goal import SavingGoal


@pytest.fixture
def trip(goal_service):
    return goal_service.create("Trip", 1000.0, deadline="2024-12-31")


def test_contributions_complete_the_goal(goal_service, trip):
    """The goal completes once the saved amount reaches the target."""
    goal = goal_service.contribute(trip.id, 400.0)
    assert (goal.current_amount, goal.progress, goal.status) == (400.0, 40, "active")

    goal = goal_service.contribute(trip.id, 700.0)
    assert (goal.current_amount, goal.progress, goal.status) == (1100.0, 100, "completed")
    assert goal.remaining == 0.0


@pytest.mark.parametrize("amount", [0.0, -10.0])
def test_contribution_must_be_positive(goal_service, trip, amount):
    """Non-positive contributions raise ValueError."""
    with pytest.raises(ValueError, match="must be positive"):
        goal_service.contribute(trip.id, amount)


def test_contribution_to_missing_goal(goal_service):
    """Unknown goals raise ValueError."""
    with pytest.raises(ValueError, match="not found"):
        goal_service.contribute(42, 10.0)


def test_create_validation(goal_service):
    """Name, target and deadline are checked."""
    with pytest.raises(ValueError, match="name"):
        goal_service.create("  ", 100.0)
    with pytest.raises(ValueError, match="Target"):
        goal_service.create("Car", 0.0)
    with pytest.raises(ValueError, match="deadline"):
        goal_service.create("Car", 100.0, deadline="someday")


def test_update_keeps_progress(goal_service, trip):
    """Editing a goal leaves the saved amount alone."""
    goal_service.contribute(trip.id, 250.0)

    goal = goal_service.update(trip.id, "Big trip", 2000.0, deadline=None)

    assert (goal.name, goal.target_amount, goal.current_amount) == ("Big trip", 2000.0, 250.0)
    assert goal.deadline is None


def test_summary(goal_service, trip):
    """Completed and active goals are counted separately."""
    other = goal_service.create("Laptop", 500.0)
    goal_service.contribute(other.id, 500.0)
    goal_service.contribute(trip.id, 100.0)

    assert goal_service.get_summary() == {
        "total_target": 1500.0,
        "total_saved": 600.0,
        "completed_count": 1,
        "active_count": 1,
    }


def test_progress_rounds_and_caps():
    """Progress is a whole percent capped at 100."""
    assert SavingGoal(id=1, name="A", target_amount=3.0, current_amount=1.0).progress == 33
    assert SavingGoal(id=1, name="A", target_amount=10.0, current_amount=50.0).progress == 100
    assert SavingGoal(id=1, name="A", target_amount=0.0).progress == 0
