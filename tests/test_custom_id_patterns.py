import pytest

from catalog.services.custom_id import CustomIdTemplate, IdElement, build_pattern
from catalog.services.custom_id.errors import CorruptTemplate, UnknownElementKind
from catalog.services.custom_id.patterns import UUID_PATTERN, element_pattern, matches_pattern


SKU_TEMPLATE = CustomIdTemplate.of(
    IdElement.fixed_text("SKU-"),
    IdElement.sequence("D3"),
    IdElement.fixed_text("-"),
    IdElement.random("X4"),
)


def test_build_pattern_for_sku_template():
    assert build_pattern(SKU_TEMPLATE) == r"^SKU\-\d{3}\-[0-9a-fA-F]{4}$"


def test_fixed_text_is_escaped():
    pattern = build_pattern(CustomIdTemplate.of(IdElement.fixed_text("A.B+(C)")))

    assert matches_pattern(pattern, "A.B+(C)")
    assert not matches_pattern(pattern, "AxB+(C)")


@pytest.mark.parametrize("element,expected", [
    (IdElement.random("D5"), r"\d{5}"),
    (IdElement.random("X2"), "[0-9a-fA-F]{2}"),
    (IdElement.random(), r"\d+"),
    (IdElement.random("Q3"), ""),
    (IdElement.sequence(), r"\d+"),
    (IdElement.sequence("D"), r"\d+"),
    (IdElement.sequence("D4"), r"\d{4}"),
    (IdElement.sequence("Q3"), r"\d+"),
    (IdElement.date_time("yyyy"), ".+"),
    (IdElement.uuid(), UUID_PATTERN),
])
def test_element_patterns(element, expected):
    assert element_pattern(element) == expected


def test_unknown_kind_has_no_pattern():
    with pytest.raises(UnknownElementKind):
        element_pattern(IdElement("Barcode"))


def test_matching_is_anchored_and_case_insensitive():
    pattern = build_pattern(SKU_TEMPLATE)

    assert matches_pattern(pattern, "SKU-006-0A1B")
    assert matches_pattern(pattern, "sku-006-0a1b")
    assert not matches_pattern(pattern, "SKU-006-0A1B-extra")
    assert not matches_pattern(pattern, "xSKU-006-0A1B")
    assert not matches_pattern(pattern, "SKU-06-0A1B")


def test_digit_classes_reject_non_ascii_digits():
    pattern = build_pattern(CustomIdTemplate.of(IdElement.random("D3")))

    assert matches_pattern(pattern, "123")
    assert not matches_pattern(pattern, "١٢٣")


def test_uuid_pattern_matches_generated_shape():
    pattern = build_pattern(CustomIdTemplate.of(IdElement.fixed_text("ID-"), IdElement.uuid()))

    assert matches_pattern(pattern, "ID-3f2504e0-4f89-41d3-9a0c-0305e82c3301")
    assert not matches_pattern(pattern, "ID-3f2504e04f8941d39a0c0305e82c3301")


def test_max_width_applies_to_patterns():
    with pytest.raises(CorruptTemplate):
        build_pattern(CustomIdTemplate.of(IdElement.random("D9")), max_width=8)
