import math
from mirror.fallback import (
    GENERIC_SELF_EXAMINATION,
    INSTRUCTIONS_ACKNOWLEDGMENT,
    TRUNCATION_NOTE,
    build_fallback_text,
    generate_fallback_reflection,
)
from mirror.validation import ReflectionRequest


def test_echoes_question_with_generic_passage():
    text = build_fallback_text(ReflectionRequest(question="What are my limitations?"))
    assert text.startswith('Reflecting on the question: "What are my limitations?"\n\n')
    assert text.endswith(GENERIC_SELF_EXAMINATION)


def test_system_prompt_named_as_guidance():
    text = build_fallback_text(ReflectionRequest(
        question="What are my strengths?",
        system_prompt="You are an expert coach helping with self-assessment.",
    ))
    assert 'guidance: "You are an expert coach helping with self-assessment."' in text


def test_context_adds_transition():
    text = build_fallback_text(ReflectionRequest(question="q", context="Previous analysis showed 25% improvement"))
    assert "Given the provided context, I should approach this" in text


def test_user_prompt_replaces_generic_passage():
    text = build_fallback_text(ReflectionRequest(
        question="How can I improve?",
        user_prompt="Focus on technical skills and provide specific actionable advice.",
    ))
    assert "improve" in text
    assert 'instructions provided: "Focus on technical skills and provide specific actionable advice."' in text
    assert text.endswith(INSTRUCTIONS_ACKNOWLEDGMENT)
    assert GENERIC_SELF_EXAMINATION not in text
    assert "potential biases" not in text


def test_all_fields_in_order():
    text = build_fallback_text(ReflectionRequest(
        question="What is my confidence level?",
        system_prompt="You are a professional mentor providing guidance.",
        user_prompt="Analyze confidence levels and provide detailed feedback.",
        context="Recent project completion with positive feedback",
    ))
    assert text.index("confidence level?") < text.index("guidance:") < text.index("Given the provided context") < text.index("instructions")


def test_truncation_note_is_last():
    text = build_fallback_text(ReflectionRequest(question="q"), truncated=True)
    assert text.endswith(TRUNCATION_NOTE)
    assert "increasing max_tokens" in text


def test_no_truncation_note_by_default():
    assert TRUNCATION_NOTE not in build_fallback_text(ReflectionRequest(question="q"))


def test_deterministic():
    request = ReflectionRequest(question="q", context="c", system_prompt="s", user_prompt="u")
    first = generate_fallback_reflection(request, truncated=True)
    second = generate_fallback_reflection(request, truncated=True)
    assert first == second


def test_tokens_used_matches_estimate():
    result = generate_fallback_reflection(ReflectionRequest(question="What are my limitations?"))
    assert result.tokens_used == math.ceil(len(result.reflection) / 4)
    assert result.tokens_used > 0
