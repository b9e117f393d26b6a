import sys

from .config import EngineConfig
from .errors import SamplingUnavailable, TruncationFailure
from .extraction import ReflectionResult, extract_reflection
from .fallback import generate_fallback_reflection
from .prompts import build_messages
from .validation import validate_request

# ---------------------------------------------------------------------------
# Mirror Reflection Engine
#
# Mirror does NOT call any LLM directly. Generation is the host's job.
#
# For each reflect call the engine validates the request, composes a short
# message sequence and hands it to whatever sampling handler the host
# registered. The handler is a single async callable:
#
#     async def handler(request: dict) -> response
#
# where request is {messages, maxTokens, temperature, metadata: {source}}
# and response is any of the shapes extract_reflection() understands.
#
# If no handler is registered, or the handler fails in any way, the caller
# still gets an answer: a template-built fallback reflection.
# ---------------------------------------------------------------------------

TRUNCATION = "truncation"
GENERIC = "generic"


def classify_failure(error, phrases):
    """
    Decide whether a sampling failure was a length/token ceiling hit.

    Adapters that can see a structured stop reason raise TruncationFailure
    directly. For everything else the failure text is matched against
    known phrasings.
    """
    if isinstance(error, TruncationFailure):
        return TRUNCATION
    message = str(error).lower()
    if any(phrase in message for phrase in phrases):
        return TRUNCATION
    return GENERIC


class ReflectionEngine:
    """
    Turns reflection requests into reflections via a host-provided sampling handler.

    Usage:
        engine = ReflectionEngine(load_config())
        engine.register_handler(my_host.sample)   # async, request dict -> response
        result = await engine.reflect({"question": "What did I miss?"})
    """

    def __init__(self, config=None, handler=None):
        self.config = config or EngineConfig()
        self._handler = handler

    def register_handler(self, handler):
        """
        Register the async sampling callable. This is where the host's LLM connects.

        The handler signature:
            async def my_handler(request: dict) -> dict | str
        """
        self._handler = handler

    def is_configured(self):
        return self._handler is not None

    def build_sampling_request(self, request):
        """Build the payload handed to the sampling handler."""
        return {
            "messages": build_messages(request, system_role=self.config.system_role),
            "maxTokens": request.max_tokens,
            "temperature": request.temperature,
            "metadata": {"source": self.config.source},
        }

    async def sample(self, request):
        """Run one sampling round-trip and return the reflection text."""
        if not self.is_configured():
            raise SamplingUnavailable("No sampling handler registered")
        response = await self._handler(self.build_sampling_request(request))
        return extract_reflection(response)

    async def reflect(self, arguments):
        """
        Validate arguments and produce a ReflectionResult.

        Raises ValidationError for a malformed request. Any failure after
        validation is absorbed into a fallback reflection.
        """
        request = validate_request(arguments, self.config)

        try:
            reflection = await self.sample(request)
        except Exception as e:
            kind = classify_failure(e, self.config.truncation_phrases)
            print(f"[Mirror] Sampling failed ({kind}), using fallback reflection: {e}", file=sys.stderr)
            return generate_fallback_reflection(request, truncated=kind == TRUNCATION)

        return ReflectionResult.from_text(reflection)
