"""
Error taxonomy for the generation core.

Everything raised by the prompt / model / extraction pipeline derives from
``GenerationError`` so the HTTP layer can turn it into a uniform
``{"error": message}`` body.
"""


class GenerationError(Exception):
    """Base class for content-generation failures."""

    public_message = "An unexpected error occurred"
    http_status = 500
    # When False, clients only ever see public_message; details stay in the logs.
    expose_message = False

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.public_message)
        self.message = message or self.public_message


class ConfigurationError(GenerationError):
    """The model credential (or another required setting) is missing."""

    public_message = "LLM_API_KEY is not configured"
    expose_message = True


class UpstreamError(GenerationError):
    """The model API answered with a non-2xx status."""

    public_message = "Failed to generate content"

    def __init__(self, status_code: int, body: str = "") -> None:
        super().__init__(f"Model API returned {status_code}: {body[:500]}")
        self.status_code = status_code
        self.body = body


class ExtractionError(GenerationError):
    """No ``{...}`` span could be located in the model output."""

    public_message = "Failed to parse AI response"

    def __init__(self, message: str = "no JSON found in response") -> None:
        super().__init__(message)


class MalformedJSONError(GenerationError):
    """A brace span was found but it does not parse as JSON."""

    public_message = "Failed to parse AI response"

    def __init__(self, cleaned: str, reason: str = "") -> None:
        detail = f"malformed JSON in response: {reason}" if reason else "malformed JSON in response"
        super().__init__(detail)
        self.cleaned = cleaned


class ShapeValidationError(GenerationError):
    """The parsed object is missing required fields or has the wrong types."""

    public_message = "Failed to parse AI response"

    def __init__(self, issues: list[str]) -> None:
        super().__init__("invalid response shape: " + "; ".join(issues))
        self.issues = issues


class ImageGenerationError(GenerationError):
    """The image model answered without an image payload."""

    public_message = "No image generated"
    expose_message = True


class SampleAnalysisError(GenerationError):
    """The uploaded sample deck could not be read."""

    public_message = "Failed to analyze sample file"
    http_status = 400
    expose_message = True


def client_message(exc: GenerationError) -> str:
    """The message safe to return in an ``{"error": ...}`` body."""
    return exc.message if exc.expose_message else exc.public_message
