import pytest

from resume_ai.llm_interaction import PromptNotFoundError, PromptRegistry, PromptTemplate, default_registry
from resume_ai.llm_interaction.errors import ConfigurationError


def test_unmatched_placeholder_stays_literal(registry):
    template = registry.get("greet")
    assert template.render({"name": "Ann"}) == "Hello Ann, job {{jobTitle}}"


def test_extra_variables_are_ignored(registry):
    out = registry.get("greet").render({"name": "Ann", "jobTitle": "Dev", "unused": 1})
    assert out == "Hello Ann, job Dev"


def test_values_are_stringified():
    template = PromptTemplate("t", "T", "1", "rank={{rank}} ok={{ok}}")
    assert template.render({"rank": 3, "ok": True}) == "rank=3 ok=True"


def test_substitution_is_single_pass():
    template = PromptTemplate("t", "T", "1", "{{a}} / {{b}}")
    # the value of a contains a placeholder; it must not be expanded
    assert template.render({"a": "{{b}}", "b": "B"}) == "{{b}} / B"


def test_no_variables_returns_body(registry):
    assert registry.get("greet").render(None) == "Hello {{name}}, job {{jobTitle}}"


def test_every_occurrence_is_replaced():
    template = PromptTemplate("t", "T", "1", "{{x}}-{{x}}")
    assert template.render({"x": "y"}) == "y-y"


def test_placeholders_in_order():
    template = PromptTemplate("t", "T", "1", "{{b}} {{a}} {{b}}")
    assert template.placeholders() == ["b", "a"]


def test_unknown_prompt_id_is_a_configuration_error(registry):
    with pytest.raises(PromptNotFoundError) as info:
        registry.get("missing")
    assert isinstance(info.value, ConfigurationError)
    assert "missing" in str(info.value)


def test_registry_is_read_only(registry):
    with pytest.raises(TypeError):
        registry.all()["greet"] = PromptTemplate("greet", "x", "x", "x")


def test_duplicate_ids_rejected():
    with pytest.raises(ValueError):
        PromptRegistry([PromptTemplate("a", "A", "1", ""), PromptTemplate("a", "A", "2", "")])


def test_swapped_returns_new_registry(registry):
    newer = registry.swapped([PromptTemplate("greet", "Greeting", "2.0", "Hi {{name}}")])
    assert newer.get("greet").version == "2.0"
    assert registry.get("greet").version == "1.0"
    assert "bullets_json" not in newer


def test_swapped_is_available_on_the_class():
    built = PromptRegistry.swapped([PromptTemplate("solo", "Solo", "1.0", "x")])
    assert isinstance(built, PromptRegistry)
    assert built.ids() == ["solo"]


def test_default_registry_contents():
    reg = default_registry()
    assert set(reg.ids()) == {
        "bullet_rewrite_json_v1",
        "ats_critique_json_v1",
        "tailor_patch_json_v1",
        "tailor_single_patch_json_v1",
    }
    assert reg.get("tailor_patch_json_v1").version == "1.2"
    assert reg.get("tailor_single_patch_json_v1").version == "1.1"


def test_builtin_json_examples_survive_rendering():
    template = default_registry().get("bullet_rewrite_json_v1")
    out = template.render({"jobTitle": "Engineer", "draft": "built stuff"})
    assert "JobTitle: Engineer" in out
    assert 'Draft: "built stuff"' in out
    assert '"bullets": [' in out
