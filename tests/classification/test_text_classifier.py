"""Tests for catalog_enrichment/classification/text_classifier.py"""

import pytest

from catalog_enrichment.classification import (
    classify,
    infer_collections,
    infer_gemstone,
    infer_length_mm,
    infer_material,
    infer_product_type,
    infer_tags,
    merge_tags,
)
from catalog_enrichment.common.text_utils import html_to_text
from catalog_enrichment.models import Material, ProductEvent, ProductType


class TestInferGemstone:
    @pytest.mark.parametrize("text,expected", [
        ("Moissanite Tennis Necklace", "Moissanite"),
        ("CZ stud earrings", "Cubic Zirconia"),
        ("Tigers eye bead bracelet", "Tiger's Eye"),
        ("Rose quartz heart pendant", "Rose Quartz"),
        ("Clear quartz point", "Quartz"),
        ("Plain curb chain", None),
        ("", None),
    ])
    def test_gemstones(self, text, expected):
        assert infer_gemstone(text) == expected


class TestInferMaterial:
    @pytest.mark.parametrize("text,expected", [
        ("Amethyst Sterling Ring", Material.SILVER_WITH_GEMSTONE),
        ("Moissanite Necklace S925", Material.SILVER_WITH_GEMSTONE),
        ("925 Silver Hoop Earrings", Material.PLAIN_SILVER),
        ("Sterling Silver Curb Chain", Material.PLAIN_SILVER),
        ("Stainless Steel Cuff", Material.STEEL),
        ("Gold Tone Hoops", Material.GOLD_TONE),
        ("Crystal Alloy Earrings", Material.ALLOY_WITH_STONE),
        ("", Material.ALLOY_WITH_STONE),
    ])
    def test_rules(self, text, expected):
        assert infer_material(text) is expected

    def test_stone_without_silver_is_alloy(self):
        assert infer_material("Opal Drop Earrings") is Material.ALLOY_WITH_STONE

    @pytest.mark.parametrize("text", [
        "Gold Tone Crystal Pendant Necklace",
        "Gold-tone rhinestone choker",
        "Gold tone plated hoops",
        "Gold Tone Amethyst Ring",
    ])
    def test_stone_keyword_beats_gold_tone(self, text):
        assert infer_material(text) is Material.ALLOY_WITH_STONE


class TestInferProductType:
    def test_bracelet_before_ring(self):
        assert infer_product_type("Ring Link Bracelet") is ProductType.BRACELET

    def test_earrings_not_ring(self):
        assert infer_product_type("Hoop Earrings") is ProductType.EARRINGS

    def test_tennis_needs_necklace(self):
        assert infer_product_type("Tennis Necklace") is ProductType.TENNIS_NECKLACE
        assert infer_product_type("Tennis Bracelet") is ProductType.BRACELET

    def test_pendant(self):
        assert infer_product_type("Opal Pendant Necklace") is ProductType.PENDANT_NECKLACE

    def test_chain_necklace(self):
        assert infer_product_type("Curb Chain Necklace") is ProductType.CHAIN_NECKLACE

    def test_first_text_wins(self):
        assert infer_product_type("Ring", "Necklace") is ProductType.RING

    def test_empty_texts_skipped(self):
        assert infer_product_type("", "Anklet") is ProductType.ANKLET

    def test_generic_fallback(self):
        assert infer_product_type("", "Mystery item") is ProductType.GENERIC


class TestInferTags:
    def test_always_base_and_gift(self):
        tags = infer_tags("", Material.ALLOY_WITH_STONE, ProductType.GENERIC, None)
        assert tags == ["Jewelry", "gift"]

    def test_silver_gemstone_necklace(self):
        tags = infer_tags("Amethyst necklace", Material.SILVER_WITH_GEMSTONE, ProductType.NECKLACE, "Amethyst")
        assert tags[:3] == ["Jewelry", "necklaces", "s925"]
        assert "amethyst" in tags
        assert "gemstone" in tags
        assert "crystal" in tags

    def test_style_tags(self):
        tags = infer_tags("Vintage palace tree of life unisex", Material.STEEL, ProductType.GENERIC, None)
        for tag in ("stainless-steel", "vintage", "palace", "tree-of-life", "spiritual", "unisex"):
            assert tag in tags

    def test_gemstone_tag_slug(self):
        tags = infer_tags("", Material.ALLOY_WITH_STONE, ProductType.GENERIC, "Tiger's Eye")
        assert "tigers-eye" in tags

    def test_no_duplicates(self):
        tags = infer_tags("tennis tennis crystal stone", Material.ALLOY_WITH_STONE, ProductType.TENNIS_NECKLACE, "Crystal")
        assert len(tags) == len(set(tags))


class TestMergeTags:
    def test_existing_first_then_new(self):
        assert merge_tags(["b", "a"], ["a", "c"]) == ["b", "a", "c"]

    def test_case_sensitive(self):
        assert merge_tags(["Gift"], ["gift"]) == ["Gift", "gift"]

    def test_blank_existing_dropped(self):
        assert merge_tags([" ", "x "], ["y"]) == ["x", "y"]

    def test_superset_of_both(self):
        existing, inferred = ["new-in", "Jewelry"], ["Jewelry", "gift"]
        merged = merge_tags(existing, inferred)
        assert set(existing) <= set(merged)
        assert set(inferred) <= set(merged)


class TestInferCollections:
    def test_category_and_gemstone(self):
        result = infer_collections(["necklaces"], ProductType.TENNIS_NECKLACE, "Moissanite")
        assert result == ["Necklaces", "Moissanite Jewelry"]

    def test_crystal_implies_spiritual(self):
        result = infer_collections(["crystal"], ProductType.GENERIC, None)
        assert result == ["Crystal Jewelry", "Spiritual Jewelry"]

    def test_spiritual_alone(self):
        assert infer_collections(["spiritual"], ProductType.GENERIC, None) == ["Spiritual Jewelry"]

    def test_mens(self):
        assert infer_collections(["mens"], ProductType.RING, None) == ["Rings", "Men's Jewelry"]

    def test_generic_without_signals(self):
        assert infer_collections([], ProductType.GENERIC, None) == []


class TestInferLengthMm:
    @pytest.mark.parametrize("strings,expected", [
        (["45cm"], 450),
        (["500mm"], 500),
        (["18 inch"], 457),
        (['18"'], 457),
        (["20 inches"], 508),
        (["Default Title"], None),
        (["30cm"], None),
        ([], None),
    ])
    def test_patterns(self, strings, expected):
        assert infer_length_mm(strings) == expected

    def test_mm_beats_cm_across_strings(self):
        assert infer_length_mm(["45 cm", "500mm"]) == 500

    def test_cm_beats_inch(self):
        assert infer_length_mm(["18 inch", "Silver / 45cm"]) == 450


class TestClassify:
    def test_totality_on_empty_input(self):
        attrs = classify("", "")
        assert attrs.material is Material.ALLOY_WITH_STONE
        assert attrs.product_type is ProductType.GENERIC
        assert attrs.gemstone is None
        assert attrs.tags == ("Jewelry", "gift")
        assert attrs.collections == ()

    def test_moissanite_tennis_necklace(self, moissanite_event):
        attrs = classify(
            moissanite_event.title,
            html_to_text(moissanite_event.body_html),
            moissanite_event.existing_tags,
            moissanite_event.product_type,
            moissanite_event.variants,
        )
        assert attrs.material is Material.SILVER_WITH_GEMSTONE
        assert attrs.gemstone == "Moissanite"
        assert attrs.product_type is ProductType.TENNIS_NECKLACE
        assert attrs.lengths_mm == {"9001": 457, "9002": 508}
        assert attrs.clean_title == "Moissanite Tennis Necklace S925"
        assert attrs.tags[:2] == ("new-in", "Jewelry")
        assert attrs.tags.count("Jewelry") == 1
        for tag in ("necklaces", "s925", "sterling-silver", "moissanite", "tennis", "gift"):
            assert tag in attrs.tags
        assert attrs.collections[:2] == ("Necklaces", "Moissanite Jewelry")

    def test_stainless_bracelet(self, steel_payload):
        event = ProductEvent.from_payload(steel_payload)
        attrs = classify(event.title, html_to_text(event.body_html), event.existing_tags,
                         event.product_type, event.variants)
        assert attrs.material is Material.STEEL
        assert attrs.product_type is ProductType.BRACELET
        assert attrs.gemstone is None
        assert attrs.tags == ("Jewelry", "bracelets", "stainless-steel", "gift")
        assert attrs.collections == ("Bracelets",)
        assert attrs.lengths_mm == {"9101": None}

    def test_product_type_field_wins(self):
        attrs = classify("Opal Necklace", "", product_type="Ring")
        assert attrs.product_type is ProductType.RING
