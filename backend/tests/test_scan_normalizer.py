"""
Tests for scan_normalizer.py - upstream shape detection
"""

import copy

import pytest

from scanverdict.services.normalization.scan_normalizer import normalize_scan_response


@pytest.mark.parametrize("raw", [None, [], {}, "text", 42, True])
def test_unrecognised_input_gives_empty_list(raw):
    assert normalize_scan_response(raw) == []


def test_single_verdict_is_wrapped_with_defaults():
    raw = {"verdict": "X"}
    out = normalize_scan_response(raw)

    assert len(out) == 1
    cat = out[0]
    assert cat["verdict"] == "X"
    assert cat["risk_score"] == 0
    assert cat["confidence"] == "N/A"
    assert cat["malicious_count"] == 0
    assert cat["total_engines"] == 0
    assert cat["detections"] == []
    assert cat["results"] == []
    assert cat["count"] == 1
    assert cat["_raw"] == raw


def test_list_of_categories(sample_response):
    out = normalize_scan_response(sample_response)

    assert len(out) == 1
    cat = out[0]
    assert cat["verdict"] == "SUSPICIOUS"
    assert cat["total_engines"] == 60
    assert len(cat["detections"]) == 2
    result = cat["results"][0]
    assert result["domain"] == "example-bad.com"
    assert result["favicon_src"] is None
    assert result["screenshot_src"] is None
    assert "_raw" not in cat


def test_list_skips_non_object_entries():
    out = normalize_scan_response([{"verdict": "CLEAN"}, "junk", None])
    assert [c["verdict"] for c in out] == ["CLEAN"]


def test_category_detections_default_to_empty_list():
    out = normalize_scan_response([{"verdict": "CLEAN", "detections": None}])
    assert out[0]["detections"] == []


def test_non_list_category_results_are_left_alone():
    out = normalize_scan_response([{"verdict": "CLEAN", "results": {"odd": True}}])
    assert out[0]["results"] == {"odd": True}


def test_categories_field():
    raw = {
        "categories": [
            {"verdict": "CLEAN", "results": [{"domain": "a.com", "favicon": "https://a.com/f.ico"}]},
            {"verdict": "MALICIOUS", "results": []},
        ]
    }
    out = normalize_scan_response(raw)

    assert [c["verdict"] for c in out] == ["CLEAN", "MALICIOUS"]
    assert out[0]["results"][0]["favicon_src"] == "https://a.com/f.ico"


def test_results_that_are_categories():
    raw = {
        "results": [
            {"verdict": "SUSPICIOUS", "results": [{"domain": "b.com"}]},
            {"verdict": "CLEAN"},
        ]
    }
    out = normalize_scan_response(raw)

    assert len(out) == 2
    assert out[0]["verdict"] == "SUSPICIOUS"
    assert out[0]["results"][0]["domain"] == "b.com"
    assert "screenshot_src" in out[0]["results"][0]


def test_results_that_are_scan_targets_become_one_category():
    raw = {"results": [{"domain": "a.com"}, {"domain": "b.com"}]}
    out = normalize_scan_response(raw)

    assert len(out) == 1
    cat = out[0]
    assert cat["verdict"] == "UNKNOWN"
    assert [r["domain"] for r in cat["results"]] == ["a.com", "b.com"]
    assert cat["count"] == 2
    assert cat["_raw"] is raw


def test_empty_results_list_still_counts_as_a_category():
    out = normalize_scan_response({"results": []})
    assert len(out) == 1
    assert out[0]["results"] == []
    assert out[0]["count"] == 0


def test_items_used_when_results_missing():
    raw = {"verdict": "CLEAN", "items": [{"ip": "203.0.113.1"}, {"ip": "203.0.113.2"}]}
    out = normalize_scan_response(raw)

    assert len(out[0]["results"]) == 2
    assert out[0]["results"][0]["favicon_src"] is None
    assert out[0]["count"] == 2


def test_explicit_count_and_fields_are_carried():
    raw = {
        "verdict": "MALICIOUS",
        "risk_score": 88,
        "confidence": "High",
        "malicious_count": 40,
        "total_engines": 70,
        "detections": [{"engine": "E1"}],
        "count": 7,
    }
    cat = normalize_scan_response(raw)[0]

    assert cat["risk_score"] == 88
    assert cat["confidence"] == "High"
    assert cat["malicious_count"] == 40
    assert cat["total_engines"] == 70
    assert cat["detections"] == [{"engine": "E1"}]
    assert cat["count"] == 7


def test_single_scan_result_payload():
    raw = {
        "input_url": "https://example.com",
        "domain": "example.com",
        "malicious_count": 5,
        "favicon_base64": "QUJD",
    }
    out = normalize_scan_response(raw)

    assert len(out) == 1
    cat = out[0]
    assert cat["verdict"] == "UNKNOWN"
    assert cat["malicious_count"] == 0
    assert cat["total_engines"] == 0
    assert cat["count"] == 1
    assert cat["results"][0]["favicon_src"] == "data:image/png;base64,QUJD"
    assert cat["results"][0]["input_url"] == "https://example.com"
    assert cat["_raw"] is raw


def test_categories_field_wins_over_results_categories():
    raw = {
        "categories": [{"verdict": "MALICIOUS"}],
        "results": [{"verdict": "CLEAN"}],
    }
    out = normalize_scan_response(raw)
    assert [c["verdict"] for c in out] == ["MALICIOUS"]


def test_input_is_not_mutated(sample_response):
    before = copy.deepcopy(sample_response)
    normalize_scan_response(sample_response)
    assert sample_response == before
