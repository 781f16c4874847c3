from resume_ai.llm_interaction import default_registry
from resume_ai.prompt_builders import ContextLine, clamp, format_context, redact_pii, rerank


def _line(rank, content, ref_id=None, idx=None, ref_type="EXPERIENCE_BULLET"):
    return ContextLine(rank, "EXPERIENCE", ref_type, ref_id, idx, content)


def test_tag_format():
    assert _line(1, "x", 12, 0).tag() == "1) [EXPERIENCE/EXPERIENCE_BULLET id=12 idx=0]"
    assert _line(4, "x").tag() == "4) [EXPERIENCE/EXPERIENCE_BULLET id=null idx=null]"


def test_format_context_renumbers_in_given_order():
    lines = [_line(7, "Built API", 3, 1), _line(2, "Led team", 3, 0)]
    assert format_context(lines) == (
        "1) [EXPERIENCE/EXPERIENCE_BULLET id=3 idx=1] Built API\n"
        "2) [EXPERIENCE/EXPERIENCE_BULLET id=3 idx=0] Led team\n"
    )
    assert [l.rank for l in rerank(lines)] == [1, 2]


def test_format_context_empty():
    assert format_context([]) == ""


def test_context_feeds_tailor_prompt():
    context = format_context([_line(1, "Shipped {{rank}} literally")])
    out = default_registry().get("tailor_patch_json_v1").render(
        {"jobDescription": "JD", "targetKeywords": "python", "context": context}
    )
    assert "1) [EXPERIENCE/EXPERIENCE_BULLET id=null idx=null] Shipped {{rank}} literally" in out


def test_clamp():
    assert clamp("abcdef", 3) == "abc"
    assert clamp("ab", 3) == "ab"
    assert clamp(None, 3) == ""


def test_redact_pii():
    text = "Mail ann@example.com, call +1 (555) 123-4567, see https://ann.dev/cv"
    assert redact_pii(text) == "Mail [EMAIL], call [PHONE], see [URL]"
    assert redact_pii(None) is None
