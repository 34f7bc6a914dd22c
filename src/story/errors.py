"""
Story generation exceptions.

Everything raised here maps to a 500 response at the API layer; request
validation problems never reach this module.
"""


class StoryWeaverError(Exception):
    """Base exception for all provider-side story generation errors."""
    pass


class MissingCredentialError(StoryWeaverError):
    """Raised before a provider call when no API key is configured."""

    def __init__(self, variable: str = "OPENAI_API_KEY"):
        self.variable = variable
        super().__init__(
            f"{variable} is not set. Please configure it in your environment."
        )


class UnrecognizedResponseError(StoryWeaverError):
    """
    Raised when a provider response carries neither a flat text field
    nor a list of output items.

    Distinct from an empty answer: a recognised shape with no text
    decodes to "" instead.
    """

    def __init__(self, response_type: str):
        self.response_type = response_type
        super().__init__(f"Unrecognized provider response shape: {response_type}")


class ProviderResponseError(StoryWeaverError):
    """
    Raised when provider output is not valid JSON or does not satisfy
    the requested schema.
    """

    def __init__(self, schema_name: str, reason: str):
        self.schema_name = schema_name
        self.reason = reason
        super().__init__(f"Provider returned invalid {schema_name}: {reason}")
