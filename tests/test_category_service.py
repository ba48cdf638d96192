"""Tests for category management rules."""
import pytest


def test_seeded_categories(category_service):
    """Default categories exist and are marked as system."""
    names = {c.name for c in category_service.get_all()}
    assert {"Salary", "Food & Dining", "Debts", "Savings", "Other"} <= names
    assert all(c.is_system for c in category_service.get_all())


def test_create_rejects_duplicate_names(category_service):
    """Names are unique regardless of case."""
    category_service.create("Pets", "expense", "#123456")
    with pytest.raises(ValueError, match="already exists"):
        category_service.create("pets", "expense", "#654321")


def test_for_transaction_type(category_service):
    """Income lists include 'both' categories but not expense ones."""
    names = {c.name for c in category_service.get_for_transaction_type("income")}
    assert {"Salary", "Savings", "Other"} <= names
    assert "Food & Dining" not in names


def test_system_categories_are_protected(category_service, category_dao):
    """System categories cannot be renamed or deleted."""
    food = category_dao.get_by_name("Food & Dining")

    with pytest.raises(ValueError, match="renamed"):
        category_service.update(food.id, "Food", food.type, food.color_hex)
    with pytest.raises(ValueError, match="deleted"):
        category_service.delete(food.id)

    recolored = category_service.update(food.id, food.name, food.type, "#000000")
    assert recolored.color_hex == "#000000"


def test_rename_carries_over_to_transactions(category_service, tx_service, tx_dao):
    """Transactions follow a renamed category."""
    pets = category_service.create("Pets", "expense", "#123456")
    tx = tx_service.create("expense", 30.0, "2024-01-01", "Pets", description="Food")

    category_service.update(pets.id, "Animals", "expense", "#123456")

    assert tx_dao.get_by_id(tx.id).category == "Animals"
    assert category_service.usage_count("Animals") == 1
    assert category_service.usage_count("Pets") == 0


def test_delete_in_use_category_is_refused(category_service, tx_service):
    """A category referenced by transactions stays."""
    pets = category_service.create("Pets", "expense", "#123456")
    tx_service.create("expense", 30.0, "2024-01-01", "Pets", description="Food")

    with pytest.raises(ValueError, match="used by 1 transaction"):
        category_service.delete(pets.id)


def test_delete_unused_category(category_service, category_dao):
    """Unused custom categories can be removed."""
    pets = category_service.create("Pets", "expense", "#123456")
    category_service.delete(pets.id)
    assert category_dao.get_by_name("Pets") is None
