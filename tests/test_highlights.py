# tests/test_highlights.py

import pytest

from src.domain.errors import MalformedLocator, UnsupportedHighlightShape
from src.domain.highlights import RegionHighlight, SpanHighlight, highlight_from_record
from src.domain.models import HighlightRecord, Rectangle


def _span(begin: int, end: int, *texts: str, item_id: str = "doc1") -> SpanHighlight:
    return SpanHighlight(item_id=item_id, begin=begin, end=end, texts=texts)


def _region(x: int, y: int, w: int, h: int, item_id: str = "doc1") -> RegionHighlight:
    return RegionHighlight(item_id=item_id, rectangle=Rectangle(x, y, w, h))


# ── Span highlights ───────────────────────────────────────────────────────────

def test_touching_spans_do_not_intersect():
    assert not _span(0, 10).intersects(_span(10, 20))
    assert not _span(10, 20).intersects(_span(0, 10))


def test_overlapping_spans_intersect_and_join():
    a, b = _span(0, 10, "left"), _span(9, 20, "right")
    assert a.intersects(b) and b.intersects(a)

    joined = a.join(b)
    assert (joined.begin, joined.end) == (0, 20)
    assert joined.texts == ("left", "right")


@pytest.mark.parametrize("outer, inner", [((0, 20), (5, 10)), ((5, 10), (0, 20))])
def test_containment_intersects_both_ways(outer, inner):
    assert _span(*outer).intersects(_span(*inner))
    assert _span(*inner).intersects(_span(*outer))


def test_join_does_not_mutate_operands():
    a, b = _span(0, 5, "alpha"), _span(4, 9, "beta")
    a.join(b)
    assert (a.begin, a.end, a.texts) == (0, 5, ("alpha",))


def test_join_keeps_first_occurrence_order_of_texts():
    joined = _span(0, 5, "alpha").join(_span(3, 8, "beta", "alpha"))
    assert joined.texts == ("alpha", "beta")


def test_span_text_replaces_newlines():
    assert _span(0, 5, "one\ntwo", "three").text == "one two three"


def test_span_rejects_reversed_bounds():
    with pytest.raises(ValueError, match="begins after"):
        _span(9, 3)


def test_spans_of_different_items_never_intersect():
    assert not _span(0, 10, item_id="doc1").intersects(_span(0, 10, item_id="doc2"))


# ── Region highlights ─────────────────────────────────────────────────────────

def test_overlapping_regions_intersect_and_join_to_bounding_box():
    a, b = _region(0, 0, 10, 10), _region(5, 5, 10, 10)
    assert a.intersects(b)
    assert a.join(b).rectangle == Rectangle(0, 0, 15, 15)


def test_regions_sharing_an_edge_or_corner_do_not_intersect():
    assert not _region(0, 0, 10, 10).intersects(_region(10, 0, 10, 10))
    assert not _region(0, 0, 10, 10).intersects(_region(10, 10, 5, 5))


def test_empty_region_never_intersects():
    assert not _region(0, 0, 10, 10).intersects(_region(2, 2, 0, 5))


def test_cross_variant_highlights_never_intersect():
    assert not _span(0, 10).intersects(_region(0, 0, 10, 10))
    assert not _region(0, 0, 10, 10).intersects(_span(0, 10))


def test_join_rejects_other_variant():
    with pytest.raises(TypeError):
        _span(0, 10).join(_region(0, 0, 10, 10))


# ── Locators ──────────────────────────────────────────────────────────────────

def test_span_locator_uses_char_fragment():
    locator = _span(3, 12).resource_locator("http://example.org/doc.txt")
    assert locator == "http://example.org/doc.txt#char=3,12"


def test_region_locator_uses_xywh_fragment():
    locator = _region(1, 2, 30, 40).resource_locator("http://example.org/map.png")
    assert locator == "http://example.org/map.png#xywh=1,2,30,40"


@pytest.mark.parametrize("resource", ["", "not a locator", "http://[::1"])
def test_malformed_resource_raises(resource):
    with pytest.raises(MalformedLocator):
        _span(0, 1).resource_locator(resource)


# ── Records ───────────────────────────────────────────────────────────────────

def test_two_coordinates_build_a_span():
    record = HighlightRecord("doc1", [4, 9], ["beta"])
    assert highlight_from_record(record) == _span(4, 9, "beta")


def test_four_coordinates_build_a_normalized_region():
    highlight = highlight_from_record(HighlightRecord("doc1", [10, 20, 0, 5]))
    assert isinstance(highlight, RegionHighlight)
    assert highlight.rectangle == Rectangle(0, 5, 10, 15)


@pytest.mark.parametrize("coordinates", [[1, 2, 3], [], [1, 2, 3, 4, 5]])
def test_other_coordinate_counts_are_unsupported(coordinates):
    with pytest.raises(UnsupportedHighlightShape) as raised:
        highlight_from_record(HighlightRecord("doc1", coordinates))
    assert raised.value.dimensions == len(coordinates)
    assert f"{len(coordinates)} dimensions" in str(raised.value)


def test_repeated_texts_in_one_record_are_kept_once():
    highlight = highlight_from_record(
        HighlightRecord("doc1", [0, 5], ["alpha", "beta", "alpha"])
    )
    assert highlight.texts == ("alpha", "beta")


def test_whole_float_coordinates_are_accepted():
    assert highlight_from_record(HighlightRecord("doc1", [2.0, 7.0])) == _span(2, 7)


@pytest.mark.parametrize("coordinates", [[0.7, 5], [0, 0, 4, 2.5], ["1", 5]])
def test_fractional_or_non_numeric_coordinates_are_rejected(coordinates):
    with pytest.raises(ValueError, match="not a whole number"):
        highlight_from_record(HighlightRecord("doc1", coordinates))
