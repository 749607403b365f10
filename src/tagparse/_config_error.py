from enum import Enum
from typing import TypeVar


class ConfigurationErrorCategory(Enum):
    EMPTY_DELIMITER = "empty delimiter"
    IDENTICAL_DELIMITERS = "identical delimiters"
    DELIMITERS_SHAPE = "delimiters shape"
    EMPTY_TYPE_SEPARATOR = "empty type separator"
    SCHEMA = "schema"


class ConfigurationError(ValueError):
    """
    Indicates an invalid parser or generator configuration.

    Always raised on construction, never while parsing.
    Malformed tags in the parsed text are dropped silently instead.
    """

    Self = TypeVar("Self", bound="ConfigurationError")

    def __init__(
        self,
        error_message: str,
        *,
        error_category: ConfigurationErrorCategory,
        reason: str,
        option: str,
    ) -> None:
        """
        Args:
            error_message:
                The formatted error message to be displayed.
            error_category:
                Category that the error belongs to.
            reason:
                Why the option is invalid.
                This should be a complete sentence.
            option:
                Name of the offending configuration option,
                e.g. `open_delimiter` or `schema`.
        """

        super().__init__(error_message)
        self.error_category = error_category
        self.reason = reason
        self.option = option

    @classmethod
    def make_option_error(
        cls,
        reason: str,
        *,
        error_category: ConfigurationErrorCategory,
        option: str,
        value: object,
    ) -> Self:
        """
        Factory method for an error caused by a single configuration option.

        Args:
            reason:
                Why the option is invalid.
                This should be a complete sentence.
            error_category:
                Category that the error belongs to.
            option:
                Name of the offending configuration option.
            value:
                The rejected value, shown with `repr()` in the message.
        """

        error_message = (
            f"Invalid configuration option `{option}`: {reason}\n"
            f"Got: {value!r}"
        )
        return cls(
            error_message=error_message,
            error_category=error_category,
            reason=reason,
            option=option,
        )
