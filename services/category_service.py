from database.category_dao import CategoryDAO
from database.transaction_dao import TransactionDAO
from models.category import Category


class CategoryService:
    def __init__(self, category_dao: CategoryDAO, tx_dao: TransactionDAO):
        self._dao = category_dao
        self._tx_dao = tx_dao

    def get_all(self) -> list[Category]:
        return self._dao.get_all()

    def get_for_transaction_type(self, tx_type: str) -> list[Category]:
        return self._dao.get_for_transaction_type(tx_type)

    def usage_count(self, name: str) -> int:
        return self._tx_dao.count_by_category(name)

    def create(self, name: str, type_: str, color_hex: str) -> Category:
        name = name.strip()
        if not name:
            raise ValueError("Category name cannot be empty.")
        existing = [c.name.lower() for c in self._dao.get_all()]
        if name.lower() in existing:
            raise ValueError(f"A category named '{name}' already exists.")
        return self._dao.create(name, type_, color_hex)

    def update(self, category_id: int, name: str, type_: str, color_hex: str) -> Category:
        name = name.strip()
        if not name:
            raise ValueError("Category name cannot be empty.")
        current = self._dao.get_by_id(category_id)
        if current is None:
            raise ValueError("Category not found.")
        existing = [c for c in self._dao.get_all() if c.id != category_id]
        if any(c.name.lower() == name.lower() for c in existing):
            raise ValueError(f"A category named '{name}' already exists.")
        if current.is_system and name != current.name:
            raise ValueError("System categories cannot be renamed.")
        updated = self._dao.update(category_id, name, type_, color_hex)
        if name != current.name:
            # transactions reference categories by name
            self._tx_dao.rename_category(current.name, name)
        return updated

    def delete(self, category_id: int):
        cat = self._dao.get_by_id(category_id)
        if cat is None:
            return
        if cat.is_system:
            raise ValueError("System categories cannot be deleted.")
        in_use = self._tx_dao.count_by_category(cat.name)
        if in_use:
            raise ValueError(
                f"'{cat.name}' is used by {in_use} transaction{'s' if in_use != 1 else ''}."
            )
        self._dao.delete(category_id)
