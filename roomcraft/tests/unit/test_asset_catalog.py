"""Unit tests for the asset catalog."""

import pytest

from roomcraft.app.schemas.asset import AssetCategory
from roomcraft.app.services.asset_catalog import (
    ASSET_FILES,
    AssetCatalog,
    asset_dimensions,
    asset_name,
    categorize_asset,
)


@pytest.fixture
def catalog() -> AssetCatalog:
    catalog = AssetCatalog(base_url="/static/assets/")
    catalog.load_assets()
    return catalog


class TestFilenameRules:
    """Metadata derived from filenames."""

    @pytest.mark.parametrize(
        "filename, category",
        [
            ("bookshelf_2.png", AssetCategory.BOOKSHELF),
            ("chair_3.png", AssetCategory.CHAIR),
            ("rug_1.png", AssetCategory.RUG),
            ("desk_2.png", AssetCategory.FURNITURE),
            ("shelf_1.png", AssetCategory.FURNITURE),
            ("laptop.png", AssetCategory.ELECTRONICS),
            ("lamp.png", AssetCategory.LIGHTING),
            ("teacher.png", AssetCategory.PEOPLE),
            ("plant_1.png", AssetCategory.DECORATION),
        ],
    )
    def test_categorize(self, filename, category):
        assert categorize_asset(filename) == category

    @pytest.mark.parametrize(
        "filename, size",
        [
            ("bookshelf_1.png", (320, 320)),
            ("chair_1.png", (270, 270)),
            ("rug_2.png", (320, 260)),
            ("plant.png", (200, 200)),
            ("poster_1.png", (160, 160)),
            ("cup.png", (120, 120)),
            ("mystery.png", (180, 180)),
        ],
    )
    def test_dimensions(self, filename, size):
        assert asset_dimensions(filename) == size

    def test_name(self):
        assert asset_name("coffee_machine.png") == "Coffee Machine"
        assert asset_name("desk.png") == "Desk"


class TestCatalog:
    """AssetCatalog lookups."""

    def test_loads_every_file(self, catalog: AssetCatalog):
        assets = catalog.get_all_assets()

        assert len(assets) == len(ASSET_FILES)
        assert len({a.id for a in assets}) == len(assets)

    def test_lookup_by_id(self, catalog: AssetCatalog):
        chair = catalog.get_asset_by_id("chair_1")

        assert chair.name == "Chair 1"
        assert chair.image_url == "/static/assets/chair_1.png"
        assert catalog.get_asset_by_id("spaceship") is None

    def test_search_is_case_insensitive(self, catalog: AssetCatalog):
        names = {a.name for a in catalog.search_assets("PLANT")}

        assert names == {"Plant", "Plant 1", "Plant 2", "Plant 3"}
        assert len(catalog.search_assets("")) == len(ASSET_FILES)

    def test_by_category(self, catalog: AssetCatalog):
        people = catalog.get_assets_by_category(AssetCategory.PEOPLE)
        assert {a.id for a in people} == {"student_1", "student_2", "teacher"}

    def test_sorting(self, catalog: AssetCatalog):
        by_name = AssetCatalog.sort_assets(catalog.get_all_assets(), "name")
        assert [a.name for a in by_name] == sorted(a.name for a in by_name)

        by_category = AssetCatalog.sort_assets(catalog.get_all_assets(), "category")
        categories = [a.category.value for a in by_category]
        assert categories == sorted(categories)

    def test_empty_before_loading(self):
        assert AssetCatalog().get_all_assets() == []
