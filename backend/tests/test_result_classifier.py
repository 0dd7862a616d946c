import math

from domain.models import ClassifiedResult, IntersectionResult, SearchDomain
from services.result_classifier import (
    classify,
    is_highway_record,
    is_street_record,
    parse_coordinates,
)


def _record(**overrides):
    base = {
        "lat": "42.3601",
        "lon": "-71.0589",
        "display_name": "Main Street, Boston, MA",
        "class": "highway",
        "type": "residential",
        "importance": 0.4,
    }
    base.update(overrides)
    return base


def test_street_predicate_matches_class_or_type():
    assert is_street_record(_record(**{"class": "street", "type": "house"}))
    assert is_street_record(_record(**{"class": "highway", "type": "service"}))
    assert not is_street_record(_record(**{"class": "highway", "type": "motorway"}))


def test_street_predicate_has_no_name_fallback():
    record = _record(display_name="123 Main Street, Springfield", **{"class": "building", "type": "house"})
    assert not is_street_record(record)
    assert classify(SearchDomain.STREET, [record]).results == ()


def test_street_empty_outcome_when_everything_filtered():
    records = [
        _record(**{"class": "building", "type": "house"}),
        _record(**{"class": "amenity", "type": "cafe"}),
    ]
    outcome = classify(SearchDomain.STREET, records)
    assert outcome.empty
    assert outcome.rejected == 2
    assert outcome.invalid == 0


def test_highway_predicate_accepts_route_in_name_case_insensitive():
    record = _record(display_name="US Route 66", **{"class": "unclassified", "type": "unclassified"})
    assert is_highway_record(record)


def test_highway_predicate_name_markers():
    assert is_highway_record(_record(display_name="Pacific Coast Highway", **{"class": "place", "type": "x"}))
    assert is_highway_record(_record(display_name="State Road 84, Florida", **{"class": "place", "type": "x"}))
    assert not is_highway_record(_record(display_name="Elm Street", **{"class": "place", "type": "x"}))


def test_highway_predicate_tolerates_missing_display_name():
    assert not is_highway_record({"class": "place", "type": "city", "lat": "1", "lon": "1"})


def test_highway_classification_maps_fields():
    raw = [
        {
            "lat": "44.9778",
            "lon": "-93.2650",
            "display_name": "I-35W, Minneapolis, MN",
            "class": "motorway",
            "type": "motorway",
            "importance": 0.6,
        }
    ]
    outcome = classify(SearchDomain.HIGHWAY, raw)
    assert outcome.results == (
        ClassifiedResult(
            lat=44.9778,
            lon=-93.2650,
            display_name="I-35W, Minneapolis, MN",
            type="motorway",
            importance=0.6,
        ),
    )


def test_type_falls_back_to_class_when_absent():
    record = _record(**{"class": "primary"})
    del record["type"]
    outcome = classify(SearchDomain.STREET, [record])
    assert outcome.results[0].type == "primary"


def test_missing_importance_defaults_to_zero():
    record = _record()
    del record["importance"]
    assert classify(SearchDomain.STREET, [record]).results[0].importance == 0.0


def test_order_is_preserved_not_sorted_by_importance():
    records = [
        _record(display_name="A", importance=0.1),
        _record(display_name="B", importance=0.9),
        _record(display_name="C", importance=0.5),
    ]
    names = [r.display_name for r in classify(SearchDomain.STREET, records).results]
    assert names == ["A", "B", "C"]


def test_unparsable_coordinates_are_dropped_and_counted():
    records = [
        _record(display_name="good"),
        _record(display_name="bad", lat="not-a-number"),
        _record(display_name="nan", lon="NaN"),
        _record(display_name="missing", lat=None),
    ]
    outcome = classify(SearchDomain.STREET, records)
    assert [r.display_name for r in outcome.results] == ["good"]
    assert outcome.invalid == 3
    assert all(not math.isnan(r.lat) for r in outcome.results)


def test_parse_coordinates_rejects_out_of_range():
    assert parse_coordinates({"lat": "91", "lon": "0"}) is None
    assert parse_coordinates({"lat": "0", "lon": "-180.5"}) is None
    assert parse_coordinates({"lat": "-33.8688", "lon": "151.2093"}) == (-33.8688, 151.2093)


def test_non_mapping_entries_count_as_invalid():
    outcome = classify(SearchDomain.HIGHWAY, ["junk", None, _record(**{"type": "trunk"})])
    assert len(outcome.results) == 1
    assert outcome.invalid == 2


def test_empty_raw_list_is_empty_outcome_for_every_domain():
    for domain in SearchDomain:
        outcome = classify(domain, [])
        assert outcome.empty
        assert outcome.invalid == 0


def test_intersection_takes_first_record_without_filter():
    records = [
        _record(display_name="Main Street & Broadway", **{"class": "building", "type": "yes"}),
        _record(display_name="second"),
    ]
    outcome = classify(SearchDomain.INTERSECTION, records)
    assert outcome.results == (
        IntersectionResult(lat=42.3601, lon=-71.0589, display_name="Main Street & Broadway"),
    )


def test_intersection_with_bad_coordinates_is_empty():
    outcome = classify(SearchDomain.INTERSECTION, [_record(lat="")])
    assert outcome.empty
    assert outcome.invalid == 1


def test_non_string_tags_never_match():
    record = _record(**{"class": ["highway"], "type": {"kind": "residential"}})
    assert not is_street_record(record)
    assert not is_highway_record(record)
    outcome = classify(SearchDomain.STREET, [record, _record(display_name="kept")])
    assert [r.display_name for r in outcome.results] == ["kept"]
    assert outcome.rejected == 1
