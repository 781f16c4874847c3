import json

import pytest

from resume_ai.llm_interaction.repair import (
    clip_to_balanced_object,
    strip_line_comments,
    try_repair,
)


@pytest.mark.parametrize(
    "broken, expected",
    [
        ('```json\n{"a": 1}\n```', {"a": 1}),
        ('Here you go: {"a": [1, 2,],} hope this helps', {"a": [1, 2]}),
        ("{“a”: “b”}", {"a": "b"}),
        ('{"a": {"b": 1}} trailing {"c": 2}', {"a": {"b": 1}}),
        ('{"entityId": 123,          // only if id tag present\n "x": 1}', {"entityId": 123, "x": 1}),
    ],
)
def test_repairs_common_model_mistakes(broken, expected):
    assert json.loads(try_repair(broken)) == expected


def test_none_passes_through():
    assert try_repair(None) is None


def test_unclosed_object_is_left_unclipped():
    out = try_repair('text {"a": 1')
    assert out == 'text {"a": 1'
    with pytest.raises(ValueError):
        json.loads(out)


def test_braces_inside_strings_do_not_count():
    assert clip_to_balanced_object('x {"a": "}{", "b": 2} y') == '{"a": "}{", "b": 2}'


def test_urls_inside_strings_keep_their_slashes():
    text = '{"u": "https://example.com/a"} // note'
    assert strip_line_comments(text) == '{"u": "https://example.com/a"} '
