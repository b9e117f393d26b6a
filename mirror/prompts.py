"""
Mirror Message Composer. Builds what gets sent to the sampling capability.

Two strategies for the system prompt, chosen once per capability profile
(EngineConfig.system_role):

  system_role=False  — one user message; the system prompt is prepended to
                       its text, followed by a blank line. This is the MCP
                       sampling shape, which only allows user/assistant roles.
  system_role=True   — a leading "system" message with the system prompt,
                       then the user message without it.

Either way exactly one user message is produced.
"""

REFLECTION_FRAMING = "You are being asked to reflect on your own reasoning and analysis. "

CONTEXT_LEAD_IN = "Given the following context:\n\n"

REFLECTION_CHECKLIST = [
    "The strengths and weaknesses of your reasoning",
    "Potential blind spots or assumptions you might have made",
    "Areas where you feel confident vs uncertain",
    "Alternative perspectives or approaches you could consider",
]

CLOSING_INSTRUCTION = "Provide a thoughtful, honest reflection:"


def build_default_prompt(question, context=None):
    """The instructional prompt used when the caller supplies no user_prompt."""
    prompt = REFLECTION_FRAMING

    if context:
        prompt += CONTEXT_LEAD_IN + context + "\n\n"

    prompt += f"Please engage in thoughtful self-reflection to answer this question: {question}\n\n"
    prompt += "In your reflection, consider:\n"
    for item in REFLECTION_CHECKLIST:
        prompt += f"- {item}\n"
    prompt += "\n" + CLOSING_INSTRUCTION

    return prompt


def build_prompt(request, inline_system=True):
    """
    Build the user-message text for a request.

    A supplied user_prompt replaces the default instructions entirely.
    With inline_system, a supplied system_prompt is prepended with a blank line.
    """
    if request.user_prompt:
        body = request.user_prompt
    else:
        body = build_default_prompt(request.question, request.context)

    if inline_system and request.system_prompt:
        return f"{request.system_prompt}\n\n{body}"
    return body


def text_message(role, text):
    return {"role": role, "content": {"type": "text", "text": text}}


def build_messages(request, system_role=False):
    """Return the ordered message sequence for the sampling capability."""
    messages = []
    if system_role and request.system_prompt:
        messages.append(text_message("system", request.system_prompt))
    messages.append(text_message("user", build_prompt(request, inline_system=not system_role)))
    return messages
