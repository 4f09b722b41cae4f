from assessment.utils.feedback import (
    collect_feedback,
    has_rich_text_content,
    selected_index,
)


def doc(text):
    return {"root": {"children": [{"type": "paragraph", "children": [{"text": text}]}]}}


class TestHasRichTextContent:

    def test_plain_string(self):
        assert has_rich_text_content("Nice") is True
        assert has_rich_text_content("   ") is False

    def test_nested_document(self):
        assert has_rich_text_content(doc("Because closures")) is True

    def test_empty_document(self):
        assert has_rich_text_content(doc("  ")) is False
        assert has_rich_text_content({"root": {"children": []}}) is False

    def test_non_content(self):
        assert has_rich_text_content(None) is False
        assert has_rich_text_content(42) is False


def test_selected_index_shapes():
    assert selected_index({"option_index": 2}) == 2
    assert selected_index(3) == 3
    assert selected_index({"optionIndex": 1}) == 1
    assert selected_index("x") is None
    assert selected_index(True) is None


class TestCollectFeedback:

    def setup_method(self):
        self.options = [
            {"text": "a", "is_correct": True,
             "feedback": [{"feedback_type": "correct", "content": doc("A is right")}]},
            {"text": "b", "is_correct": False,
             "feedback": [{"content": doc("B is a trap")}]},
            {"text": "c", "is_correct": True,
             "feedback": [
                 {"feedback_type": "correct", "content": doc("C is right too")},
                 {"feedback_type": "incorrect", "content": doc("only shown when picked")},
             ]},
            {"text": "d", "is_correct": False,
             "feedback": [{"feedback_type": "incorrect", "content": doc("")}]},
        ]

    def test_selected_option_feedback_with_type_fallback(self):
        items, out_of_range = collect_feedback(self.options, [{"option_index": 1}], False)

        assert out_of_range == []
        assert items == [{
            "option_index": 1,
            "feedback_type": "incorrect",
            "content": doc("B is a trap"),
        }]

    def test_empty_content_is_ignored(self):
        items, _ = collect_feedback(self.options, [3], False)
        assert items == []

    def test_correct_answer_adds_unselected_correct_feedback(self):
        items, _ = collect_feedback(self.options, [{"option_index": 0}], True)

        assert [(i["option_index"], i["feedback_type"]) for i in items] == [
            (0, "correct"),
            (2, "correct"),
        ]

    def test_incorrect_answer_does_not_add_unselected(self):
        items, _ = collect_feedback(self.options, [0], False)
        assert [i["option_index"] for i in items] == [0]

    def test_out_of_range_reported(self):
        items, out_of_range = collect_feedback(self.options, [{"option_index": 9}, -1], False)
        assert items == []
        assert out_of_range == [{"option_index": 9}, -1]

    def test_options_missing(self):
        items, out_of_range = collect_feedback(None, [0], False)
        assert items == []
        assert out_of_range == [0]
