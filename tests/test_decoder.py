"""Tests for tolerant decoding of provider responses."""
from src.prior_art.decoder import candidate_from_raw, decode_candidates, extract_json_array


FENCED_RESPONSE = """Here are the most relevant patents I found:

```json
[
  {"number": "US10567123B2", "title": "Foreign object detection", "abstract": "A pad ...",
   "date": "2020-02-18", "assignee": "Example Corp."},
  {"number": "EP3789456A1", "title": "Charging station", "abstract": "A station ..."}
]
```

Let me know if you need more detail."""


class TestExtractJsonArray:
    def test_plain_array(self):
        assert extract_json_array('[{"title": "x"}]') == [{"title": "x"}]

    def test_array_inside_prose_and_fences(self):
        items = extract_json_array(FENCED_RESPONSE)
        assert [i["number"] for i in items] == ["US10567123B2", "EP3789456A1"]

    def test_skips_citation_markers_before_the_payload(self):
        text = 'According to [1] and [2], see: [{"title": "Pad"}]'
        assert extract_json_array(text) == [{"title": "Pad"}]

    def test_skips_malformed_bracket_runs(self):
        text = '[not json] then [{"title": "ok"}]'
        assert extract_json_array(text) == [{"title": "ok"}]

    def test_no_array(self):
        assert extract_json_array("I could not find any patents.") is None
        assert extract_json_array("") is None

    def test_truncated_array_is_unparseable(self):
        assert extract_json_array('[{"title": "cut off"') is None


class TestCandidateFromRaw:
    def test_maps_aliases(self):
        candidate = candidate_from_raw({
            "patent_number": "US1234567",
            "name": "Widget",
            "summary": "A widget.",
            "publication_date": "2019-01-01",
            "organization": "Acme",
        })
        assert candidate.publication_number == "US1234567"
        assert candidate.title == "Widget"
        assert candidate.abstract == "A widget."
        assert candidate.patent_date == "2019-01-01"
        assert candidate.assignee == "Acme"

    def test_missing_fields_default(self):
        candidate = candidate_from_raw({"title": "Only a title"})
        assert candidate.publication_number == ""
        assert candidate.abstract == ""
        assert candidate.patent_date is None
        assert candidate.assignee is None

    def test_non_string_values_are_coerced(self):
        candidate = candidate_from_raw({"title": 42, "assignee": ["Acme", "Beta"], "date": None})
        assert candidate.title == "42"
        assert candidate.assignee == "Acme, Beta"
        assert candidate.patent_date is None

    def test_unusable_entries(self):
        assert candidate_from_raw("US1234567") is None
        assert candidate_from_raw({"date": "2020-01-01"}) is None


class TestDecodeCandidates:
    def test_decodes_fenced_response(self):
        candidates = decode_candidates(FENCED_RESPONSE)
        assert len(candidates) == 2
        assert candidates[0].assignee == "Example Corp."
        assert candidates[1].assignee is None

    def test_unparseable_returns_none(self):
        assert decode_candidates("Sorry, the search failed.") is None
        assert decode_candidates(None) is None

    def test_empty_array_is_parseable(self):
        assert decode_candidates("No results: []") == []

    def test_skips_bad_entries(self):
        candidates = decode_candidates('[{"title": "Good"}, 7, {"date": "2020"}]')
        assert [c.title for c in candidates] == ["Good"]
