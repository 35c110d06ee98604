"""Tests for pulling JSON out of model replies."""

import pytest

from careerpath.ai.llm_utils import parse_llm_json_response


class TestWholeReply:
    """Replies that are already valid JSON."""

    @pytest.mark.parametrize(
        ("content", "expected"),
        [
            ('{"answer": "Start with HTML"}', {"answer": "Start with HTML"}),
            ('["Git", "Linux"]', ["Git", "Linux"]),
            ("[]", []),
            ('{"steps": [{"bullets": [1, 2]}]}', {"steps": [{"bullets": [1, 2]}]}),
            ('  \n {"answer": "ok"}  \n', {"answer": "ok"}),
            ('{"answer": "سافٹ ویئر انجینئر"}', {"answer": "سافٹ ویئر انجینئر"}),
        ],
    )
    def test_parses(self, content, expected):
        assert parse_llm_json_response(content) == expected


class TestTrailingCommas:
    def test_object(self):
        assert parse_llm_json_response('{"answer": "ok",}') == {"answer": "ok"}

    def test_nested(self):
        content = '[{"title": "Learn SQL", "bullets": ["SELECT", "JOIN",],},]'
        assert parse_llm_json_response(content) == [{"title": "Learn SQL", "bullets": ["SELECT", "JOIN"]}]


class TestCodeFences:
    @pytest.mark.parametrize("tag", ["json", "JSON", "javascript", "js", "text", ""])
    def test_language_tags(self, tag):
        content = f'```{tag}\n{{"answer": "ok"}}\n```'
        assert parse_llm_json_response(content) == {"answer": "ok"}

    def test_prose_around_fence(self):
        content = """Here is a roadmap for you:
```json
[{"title": "Learn Docker", "bullets": ["Images", "Volumes"]}]
```
Good luck with your studies!"""
        result = parse_llm_json_response(content)
        assert result[0]["title"] == "Learn Docker"

    def test_first_fence_wins(self):
        content = '```json\n{"answer": "first"}\n```\nor maybe\n```json\n{"answer": "second"}\n```'
        assert parse_llm_json_response(content) == {"answer": "first"}


class TestEmbeddedJson:
    """JSON embedded in prose without a code fence."""

    def test_object_in_sentence(self):
        content = 'My answer is {"answer": "Practice daily"} as requested.'
        assert parse_llm_json_response(content) == {"answer": "Practice daily"}

    def test_list_in_sentence(self):
        assert parse_llm_json_response('Steps: ["a", "b"] done') == ["a", "b"]

    def test_brackets_inside_strings(self):
        content = 'Result: {"answer": "Read the [docs] and {examples}"} end.'
        assert parse_llm_json_response(content) == {"answer": "Read the [docs] and {examples}"}

    def test_escaped_quotes(self):
        content = r'Reply: {"answer": "Say \"hello world\" first"} end.'
        assert parse_llm_json_response(content) == {"answer": 'Say "hello world" first'}

    def test_first_object_wins(self):
        assert parse_llm_json_response('One {"a": 1} and two {"b": 2}') == {"a": 1}


class TestExpectedType:
    def test_list_required(self):
        assert parse_llm_json_response("```json\n[]\n```", expected=list) == []

    def test_dict_where_list_required(self):
        with pytest.raises(ValueError, match="Expected JSON list, got dict"):
            parse_llm_json_response('{"title": "Learn HTML"}', expected=list)

    def test_list_where_dict_required(self):
        with pytest.raises(ValueError, match="Expected JSON dict, got list"):
            parse_llm_json_response('["Practice daily"]', expected=dict)


class TestFailures:
    @pytest.mark.parametrize("content", ["", None])
    def test_empty(self, content):
        with pytest.raises(ValueError, match="Empty LLM response"):
            parse_llm_json_response(content)

    @pytest.mark.parametrize(
        "content",
        [
            "   \n  ",
            "I'm sorry, I can't help with that.",
            "{not json}",
            '{"answer": "cut off',
        ],
    )
    def test_no_json(self, content):
        with pytest.raises(ValueError, match="no valid JSON found"):
            parse_llm_json_response(content)


def test_generated_steps_reply():
    """A typical step-drafting reply: prose, a fence and trailing commas."""
    content = """Sure! Here are the steps:

```json
[
    {
        "title": "Learn HTML",
        "bullets": ["Understand tags", "Create a webpage"],
        "link": "https://developer.mozilla.org/en-US/docs/Web/HTML",
    },
    {
        "title": "Learn CSS",
        "bullets": ["Style elements", "Use Flexbox"],
    },
]
```"""
    steps = parse_llm_json_response(content, expected=list)
    assert [s["title"] for s in steps] == ["Learn HTML", "Learn CSS"]
    assert "link" not in steps[1]
