from src.prior_art.context import backend_summary, build_search_context, format_questions


class TestBuildSearchContext:
    def test_explicit_query_wins_verbatim(self):
        context = build_search_context(
            idea_prompt="ignored idea",
            search_query="  Wireless charging pad  ",
        )
        assert context == "  Wireless charging pad  "

    def test_blank_query_falls_back_to_session_fields(self):
        context = build_search_context(idea_prompt="Idea", search_query="   ")
        assert context == "Idea"

    def test_fixed_field_order_and_skips_empty(self):
        context = build_search_context(
            idea_prompt="Idea",
            technical_analysis="",
            qa_pairs=[("Q1?", "A1"), ("Q2?", None)],
            backend_analysis_summary="Backend summary",
            patent_category="utility",
        )
        assert context == "Idea\nQ: Q1?\nA: A1\nBackend summary\nutility"

    def test_truncated_to_max_chars(self):
        context = build_search_context(idea_prompt="x" * 50, max_chars=10)
        assert context == "x" * 10

        context = build_search_context(search_query="y" * 50, max_chars=10)
        assert context == "y" * 10

    def test_nothing_available_gives_empty_string(self):
        assert build_search_context() == ""


def test_format_questions_skips_unanswered():
    text = format_questions([("Why?", "Because"), ("How?", "  "), ("When?", None)])
    assert text == "Q: Why?\nA: Because"


class TestBackendSummary:
    def test_dict_summary(self):
        assert backend_summary({"summary": "Uses 12 tables"}) == "Uses 12 tables"

    def test_plain_string(self):
        assert backend_summary("raw analysis") == "raw analysis"

    def test_missing_or_unexpected(self):
        assert backend_summary(None) == ""
        assert backend_summary({"tables": []}) == ""
        assert backend_summary(["not", "a", "dict"]) == ""
