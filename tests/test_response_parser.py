import json

from analysis_engine.response_parser import (
    FALLBACK_CAUSES,
    FALLBACK_DISEASE,
    has_disclaimer,
    parse_analysis,
    strip_code_fences,
)


def test_fenced_json_is_returned_unchanged():
    content = '```json\n{"disease":"Eczema","causes":"Dry skin","summary":"Mild case"}\n```'

    result = parse_analysis(content)

    assert result.to_dict() == {"disease": "Eczema", "causes": "Dry skin", "summary": "Mild case"}


def test_unfenced_json_is_returned_unchanged():
    payload = {"disease": "Psoriasis", "causes": "Immune response", "summary": "Plaques on elbows."}

    assert parse_analysis(json.dumps(payload)).to_dict() == payload


def test_bare_fence_without_language_tag():
    content = '```\n{"disease":"Acne","causes":"Sebum","summary":"Comedones"}\n```'

    assert parse_analysis(content).disease == "Acne"


def test_extra_keys_are_dropped():
    content = '{"disease":"Rosacea","causes":"Unknown","summary":"Redness","severity":"mild"}'

    assert parse_analysis(content).to_dict() == {
        "disease": "Rosacea",
        "causes": "Unknown",
        "summary": "Redness",
    }


def test_plain_text_falls_back_with_raw_summary():
    content = "This looks like mild eczema. Consult a dermatologist."

    result = parse_analysis(content)

    assert result.disease == FALLBACK_DISEASE
    assert result.causes == FALLBACK_CAUSES
    assert result.summary == content


def test_fallback_summary_keeps_fences_verbatim():
    content = "```json\n{not valid json}\n```"

    assert parse_analysis(content).summary == content


def test_json_missing_a_field_falls_back():
    content = '{"disease":"Eczema","causes":"Dry skin"}'

    result = parse_analysis(content)

    assert result.disease == FALLBACK_DISEASE
    assert result.summary == content


def test_non_string_field_falls_back():
    content = '{"disease":"Eczema","causes":["Dry skin"],"summary":"Mild"}'

    assert parse_analysis(content).disease == FALLBACK_DISEASE


def test_json_array_falls_back():
    assert parse_analysis("[1, 2, 3]").summary == "[1, 2, 3]"


def test_strip_code_fences():
    assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fences('  {"a": 1}  ') == '{"a": 1}'


def test_has_disclaimer():
    assert has_disclaimer("This is not a substitute for professional medical advice.")
    assert has_disclaimer("Disclaimer: see a doctor.")
    assert not has_disclaimer("Apply moisturiser twice daily.")


def test_deeply_nested_reply_falls_back():
    content = "[" * 100000 + "]" * 100000

    result = parse_analysis(content)

    assert result.disease == FALLBACK_DISEASE
    assert result.causes == FALLBACK_CAUSES
    assert result.summary == content
