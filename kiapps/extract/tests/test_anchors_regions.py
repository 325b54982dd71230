import pytest

from kiapps.extract.anchors import (
    APPLICATION_NUMBER,
    APPLICATION_RECEIVED,
    FULL_DEVELOPMENT_APPROVAL,
    HEADINGS,
    TITLE,
    locate_anchors,
)
from kiapps.extract.geometry import Rectangle
from kiapps.extract.regions import FIELD_RULES, FieldRule, compute_region
from kiapps.extract.tests.page_fixtures import el, register_page

# ---------------------------
# Anchors
# ---------------------------


def test_all_headings_found_on_register_page():
    anchors = locate_anchors(register_page())
    assert set(anchors) == {h.key for h in HEADINGS}


def test_heading_match_ignores_case_and_whitespace():
    anchors = locate_anchors([el("FULL  DEVELOPMENT approval", 0, 0, 10)])
    assert FULL_DEVELOPMENT_APPROVAL in anchors


def test_application_number_matches_by_prefix():
    anchors = locate_anchors([el("Application No.:", 0, 0, 10)])
    assert anchors[APPLICATION_NUMBER].text == "Application No.:"


def test_other_headings_need_exact_match():
    anchors = locate_anchors([el("Title Deeds", 0, 0, 10)])
    assert TITLE not in anchors


def test_first_matching_element_wins():
    first = el("Title", 0, 0, 10)
    second = el("Title", 0, 50, 10)
    assert locate_anchors([first, second])[TITLE] is first


def test_synonym_fallback_used_when_primary_missing():
    synonym = el("Application r Date", 0, 0, 10)
    assert locate_anchors([synonym])[APPLICATION_RECEIVED] is synonym


def test_primary_label_has_priority_over_earlier_synonym():
    synonym = el("Application r Date", 0, 0, 10)
    primary = el("Application Received", 0, 80, 10)
    assert locate_anchors([synonym, primary])[APPLICATION_RECEIVED] is primary


# ---------------------------
# Regions
# ---------------------------


def _anchors(*pairs):
    return {key: element for key, element in pairs}


def test_region_bounded_by_full_development_approval():
    anchors = _anchors(
        (APPLICATION_NUMBER, el("Application No", 50, 100, 80)),
        (FULL_DEVELOPMENT_APPROVAL, el("Full Development Approval", 400, 100, 120)),
    )
    region = compute_region(FIELD_RULES["application_number"], anchors)
    assert region == Rectangle(130, 100, 270, 10)


def test_region_fallback_is_twice_anchor_width():
    anchors = _anchors((APPLICATION_NUMBER, el("Application No", 50, 100, 80)))
    region = compute_region(FIELD_RULES["application_number"], anchors)
    assert region == Rectangle(130, 100, 160, 10)


def test_bound_to_the_left_of_the_anchor_is_ignored():
    anchors = _anchors(
        (APPLICATION_NUMBER, el("Application No", 300, 100, 80)),
        (FULL_DEVELOPMENT_APPROVAL, el("Full Development Approval", 10, 100, 120)),
    )
    region = compute_region(FIELD_RULES["application_number"], anchors)
    assert region.width == 160


def test_missing_anchor_gives_no_region():
    assert compute_region(FIELD_RULES["received_date"], {}) is None


def test_description_extends_to_relevant_authority():
    anchors = locate_anchors(register_page())
    region = compute_region(FIELD_RULES["description"], anchors)
    assert region == Rectangle(130, 140, 270, 30)


def test_multiline_fallback_is_twice_anchor_height():
    anchors = locate_anchors(
        [el("Development Description", 50, 140, 80), el("Full Development Approval", 400, 100, 120)]
    )
    region = compute_region(FIELD_RULES["description"], anchors)
    assert region.height == 20
    assert region.width == 270


def test_nearest_anchor_on_same_row_bounds_property_fields():
    anchors = locate_anchors(register_page())
    house = compute_region(FIELD_RULES["house_number"], anchors)
    # "Lot No" at x=200 is closer than "Full Development Approval" at x=400
    assert house == Rectangle(90, 200, 110, 10)
    lot = compute_region(FIELD_RULES["lot_number"], anchors)
    assert lot.x == 240
    assert lot.right == 400


@pytest.mark.parametrize("name", sorted(FIELD_RULES))
def test_every_field_has_region_on_register_page(name):
    anchors = locate_anchors(register_page())
    region = compute_region(FIELD_RULES[name], anchors)
    assert region is not None
    assert region.width > 0 and region.height > 0


def test_custom_rule_uses_listed_bounds_in_priority_order():
    rule = FieldRule(TITLE, right_bounds=(APPLICATION_NUMBER, FULL_DEVELOPMENT_APPROVAL))
    anchors = _anchors(
        (TITLE, el("Title", 0, 0, 20)),
        (APPLICATION_NUMBER, el("Application No", 300, 50, 20)),
        (FULL_DEVELOPMENT_APPROVAL, el("Full Development Approval", 100, 0, 20)),
    )
    assert compute_region(rule, anchors).right == 300
