"""
Fallback reflections, built from templates when sampling is unavailable or fails.

No external call is made. The output depends only on the request fields and
whether the failed attempt was truncated, so identical inputs always produce
identical text.
"""

from .extraction import ReflectionResult

GENERIC_SELF_EXAMINATION = (
    "I should approach this through systematic self-examination. "
    "This question prompts me to consider my reasoning processes, "
    "potential biases, and the confidence levels in my analysis. "
    "I should evaluate both what I know and what I'm uncertain about, "
    "while considering alternative perspectives that might challenge my initial thinking."
)

INSTRUCTIONS_ACKNOWLEDGMENT = (
    "I will address this question according to these instructions "
    "while maintaining thoughtful self-examination."
)

TRUNCATION_NOTE = (
    "Note: The original reflection attempt was truncated because it reached the token limit. "
    "Consider increasing max_tokens for a more complete reflection."
)


def build_fallback_text(request, truncated=False):
    reflection = f'Reflecting on the question: "{request.question}"\n\n'

    if request.system_prompt:
        reflection += f'Following the guidance: "{request.system_prompt}"\n\n'

    if request.context:
        reflection += "Given the provided context, "

    if request.user_prompt:
        reflection += f'I will follow the specific instructions provided: "{request.user_prompt}"\n\n'
        reflection += INSTRUCTIONS_ACKNOWLEDGMENT
    else:
        reflection += GENERIC_SELF_EXAMINATION

    if truncated:
        reflection += "\n\n" + TRUNCATION_NOTE

    return reflection


def generate_fallback_reflection(request, truncated=False):
    return ReflectionResult.from_text(build_fallback_text(request, truncated))
