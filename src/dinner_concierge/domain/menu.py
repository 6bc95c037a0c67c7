"""Menu catalog models."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class CategoryKey(StrEnum):
    """The four fixed menu categories, in display order."""

    SOUP = "soup"
    APPETIZER = "appetizer"
    MAIN = "main"
    A_LA_CARTE = "aLaCarte"


SINGLE_CHOICE_CATEGORIES: tuple[CategoryKey, ...] = (
    CategoryKey.SOUP,
    CategoryKey.APPETIZER,
    CategoryKey.MAIN,
)


class MenuItem(BaseModel):
    """Single selectable dish."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    price: float | None = None
    description: str | None = None


class MenuCategory(BaseModel):
    """Ordered list of dishes with selection policy flags."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    items: list[MenuItem] = Field(default_factory=list)
    required: bool = False
    multi_select: bool = Field(default=False, alias="multiSelect")

    def find_item(self, item_id: str) -> MenuItem | None:
        """Return the item with the given id in this category, if present."""
        if not item_id:
            return None
        return next((item for item in self.items if item.id == item_id), None)


class FullMenu(BaseModel):
    """The four-category catalog in effect for a session."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    soup: MenuCategory
    appetizer: MenuCategory
    main: MenuCategory
    a_la_carte: MenuCategory = Field(alias="aLaCarte")

    def category(self, key: CategoryKey) -> MenuCategory:
        """Return the category stored under a key."""
        return {
            CategoryKey.SOUP: self.soup,
            CategoryKey.APPETIZER: self.appetizer,
            CategoryKey.MAIN: self.main,
            CategoryKey.A_LA_CARTE: self.a_la_carte,
        }[key]

    def categories(self) -> list[tuple[CategoryKey, MenuCategory]]:
        """Return categories in display order."""
        return [(key, self.category(key)) for key in CategoryKey]

    def all_items(self) -> list[MenuItem]:
        """Flatten every category into one list."""
        return [item for _, category in self.categories() for item in category.items]

    def find_item(self, item_id: str) -> MenuItem | None:
        """Look up an item id across all categories; the first match wins."""
        if not item_id:
            return None
        return next((item for item in self.all_items() if item.id == item_id), None)
