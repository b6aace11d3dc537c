"""
Asset catalog.

Catalog entries are derived from image filenames: the filename prefix
picks the category and the default display size, and the display name is
the title-cased stem. The catalog only supplies display metadata; design
invariants never depend on it.
"""

from typing import Literal

from roomcraft.app.schemas.asset import Asset, AssetCategory

ASSET_FILES = [
    "backpack_1.png",
    "backpack_2.png",
    "book.png",
    "bookshelf_1.png",
    "bookshelf_2.png",
    "bookshelf_3.png",
    "calendar.png",
    "chair_1.png",
    "chair_2.png",
    "chair_3.png",
    "chair_4.png",
    "chair_5.png",
    "chalkboard.png",
    "clock.png",
    "coffee_machine.png",
    "cube.png",
    "cube_2.png",
    "cup.png",
    "curtain_1.png",
    "desk.png",
    "desk_2.png",
    "lamp.png",
    "laptop.png",
    "light_switch.png",
    "mouse.png",
    "plant.png",
    "plant_1.png",
    "plant_2.png",
    "plant_3.png",
    "poster_1.png",
    "printer.png",
    "rug_1.png",
    "rug_2.png",
    "rug_3.png",
    "shelf_1.png",
    "student_1.png",
    "student_2.png",
    "teacher.png",
    "to_do.png",
    "trash.png",
    "trashcan.png",
]

# (prefix, category), checked in order
_CATEGORY_PREFIXES: list[tuple[tuple[str, ...], AssetCategory]] = [
    (("bookshelf",), AssetCategory.BOOKSHELF),
    (("chair",), AssetCategory.CHAIR),
    (("rug",), AssetCategory.RUG),
    (("desk", "shelf", "curtain", "chalkboard"), AssetCategory.FURNITURE),
    (("laptop", "mouse", "coffee_machine", "printer", "light_switch"), AssetCategory.ELECTRONICS),
    (("lamp",), AssetCategory.LIGHTING),
    (("student", "teacher"), AssetCategory.PEOPLE),
]

# (substrings, (width, height)), checked in order
_SIZE_RULES: list[tuple[tuple[str, ...], tuple[int, int]]] = [
    (("bookshelf", "desk"), (320, 320)),
    (("chair", "chalkboard"), (270, 270)),
    (("student", "teacher"), (250, 250)),
    (("rug",), (320, 260)),
    (("plant", "lamp", "clock", "backpack", "printer", "coffee_machine", "trash"), (200, 200)),
    (("laptop", "poster", "calendar", "shelf", "curtain"), (160, 160)),
    (("cup", "mouse", "book", "cube", "light_switch", "to_do"), (120, 120)),
]
_DEFAULT_SIZE = (180, 180)


def categorize_asset(filename: str) -> AssetCategory:
    lower = filename.lower()
    for prefixes, category in _CATEGORY_PREFIXES:
        if lower.startswith(prefixes):
            return category
    return AssetCategory.DECORATION


def asset_dimensions(filename: str) -> tuple[int, int]:
    lower = filename.lower()
    for needles, size in _SIZE_RULES:
        if any(needle in lower for needle in needles):
            return size
    return _DEFAULT_SIZE


def asset_name(filename: str) -> str:
    """``coffee_machine.png`` -> ``Coffee Machine``."""
    stem = filename.rsplit(".", 1)[0]
    return " ".join(word.capitalize() for word in stem.split("_"))


class AssetCatalog:
    """Catalog of placeable assets."""

    def __init__(self, base_url: str = "/assets", files: list[str] | None = None):
        self.base_url = base_url.rstrip("/")
        self.files = files if files is not None else ASSET_FILES
        self._assets: list[Asset] = []

    def load_assets(self) -> list[Asset]:
        """Build catalog entries for every asset file."""
        assets = []
        for filename in self.files:
            width, height = asset_dimensions(filename)
            url = f"{self.base_url}/{filename}"
            assets.append(
                Asset(
                    id=filename.rsplit(".", 1)[0],
                    name=asset_name(filename),
                    category=categorize_asset(filename),
                    image_url=url,
                    thumbnail_url=url,
                    width=width,
                    height=height,
                )
            )
        self._assets = assets
        return list(assets)

    def get_asset_by_id(self, asset_id: str) -> Asset | None:
        return next((asset for asset in self._assets if asset.id == asset_id), None)

    def get_all_assets(self) -> list[Asset]:
        return list(self._assets)

    def search_assets(self, query: str) -> list[Asset]:
        """Case-insensitive name search; an empty query returns everything."""
        if not query:
            return self.get_all_assets()
        needle = query.lower()
        return [asset for asset in self._assets if needle in asset.name.lower()]

    def get_assets_by_category(self, category: AssetCategory) -> list[Asset]:
        return [asset for asset in self._assets if asset.category == category]

    @staticmethod
    def sort_assets(assets: list[Asset], sort_by: Literal["name", "category"]) -> list[Asset]:
        if sort_by == "name":
            return sorted(assets, key=lambda a: a.name)
        if sort_by == "category":
            return sorted(assets, key=lambda a: a.category.value)
        return list(assets)
