"""Tests for danger categories and layer metadata."""

from crisismap.categories import AREA_CATEGORIES, LAYERS, Category, category_tag, ordered_keys


class TestCategories:
    """Tests for the category catalog."""

    def test_one_layer_per_category(self):
        assert [layer.category for layer in LAYERS] == list(Category)

    def test_area_categories(self):
        assert AREA_CATEGORIES == (Category.EVAC,)

    def test_point_layers_have_symbols(self):
        symbols = {layer.category: layer.symbol for layer in LAYERS}

        assert symbols[Category.SITES] == "missile"
        assert symbols[Category.EVAC] is None

    def test_colors_are_hex(self):
        assert all(layer.color.startswith("#") and len(layer.color) == 7 for layer in LAYERS)

    def test_category_tag(self):
        assert category_tag(Category.STRIKES) == "strikes"
        assert category_tag("other") == "other"

    def test_ordered_keys(self):
        keys = ["zeta", "nuclear", "alpha", "strikes", Category.SITES]
        assert ordered_keys(keys) == ["strikes", Category.SITES, "nuclear", "zeta", "alpha"]
