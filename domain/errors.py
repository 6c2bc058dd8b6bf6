"""Everything that can go wrong while cooking up a recipe.

Each error carries the message shown to the user and the HTTP status used
when it is reported before the stream has started.
"""


class KitchenError(Exception):
    default_message = "An unexpected error occurred"
    status_code = 500

    def __init__(self, message: str | None = None) -> None:
        self.message = self.default_message if message is None else message
        super().__init__(self.message)


class InvalidInput(KitchenError):
    default_message = "Request body must contain a messages array."
    status_code = 400


class ConfigurationError(KitchenError):
    default_message = "Completion gateway is not configured"


class RateLimited(KitchenError):
    default_message = "Rate limits exceeded. Please try again in a moment."
    status_code = 429


class CreditsExhausted(KitchenError):
    default_message = "AI usage credits depleted. Please add credits to continue."
    status_code = 402


class ServiceUnavailable(KitchenError):
    default_message = "AI service temporarily unavailable."


class MalformedBrief(KitchenError):
    default_message = "The director returned an unusable creative brief."


class MalformedVerdict(KitchenError):
    default_message = "The reviewer returned an unusable verdict."


class RubricNotSatisfied(KitchenError):
    default_message = "The recipe did not satisfy the rubric after 3 attempts."
