"""
Error collection and message templating for validators.

The ErrorManager owns two maps: field -> display label, and field -> list of
formatted error messages. Message templates may contain ``{field}``,
``{field1}``..``{fieldN}``, ``{value}`` and printf conversions; this module
turns a template plus rule parameters into the final message.
"""

import re
from typing import Any, Literal

from valicomb.core.formatting import render_param, render_value, sprintf
from valicomb.core.types import ErrorMap

FIELD_TOKEN = "{field}"
VALUE_TOKEN = "{value}"

_WORD_START = re.compile(r"(^|\s)(\S)")


def auto_label(field: str) -> str:
    """
    Derive a display label from a field name.

    Underscores become spaces and every word starts upper-case; the rest of
    each word is left as is.

    Examples:
        "first_name" -> "First Name"
        "user.email" -> "User.email"
    """
    spaced = str(field).replace("_", " ")
    return _WORD_START.sub(lambda m: m.group(1) + m.group(2).upper(), spaced)


class ErrorManager:
    """Collects formatted validation errors and holds field labels.

    Errors are kept in insertion order per field and are never deduplicated
    or reordered: the order is the order rules were evaluated in.
    """

    def __init__(self, prepend_labels: bool = True):
        self._errors: ErrorMap = {}
        self._labels: dict[str, str] = {}
        self.prepend_labels = prepend_labels

    def get_errors(self, field: str | None = None) -> ErrorMap | list[str] | Literal[False]:
        """
        Get error messages.

        Params:
            field: Optional field name to get errors for

        Returns:
            The full error map when no field is given; otherwise the field's
            message list, or False when the field has no errors
        """
        if field is not None:
            return self._errors.get(field, False)
        return self._errors

    def has_no_errors(self) -> bool:
        """Check that no error has been recorded."""
        return not self._errors

    def clear_errors(self) -> None:
        """Drop all recorded errors."""
        self._errors = {}

    def add_error(
        self,
        field: str,
        message: str,
        params: tuple[Any, ...] | list[Any] = (),
        value: Any = None,
    ) -> str:
        """
        Format a message template and append it to a field's error list.

        Params:
            field: Field the error belongs to
            message: Template with {field}, {fieldN}, {value} and printf placeholders
            params: Rule parameters used for placeholder substitution
            value: The value that failed validation, for {value}

        Returns:
            The formatted message that was recorded
        """
        params = list(params)
        message = self._apply_labels(field, message, params)

        values = []
        for param in params:
            if isinstance(param, str) and param in self._labels:
                values.append(self._labels[param])
            else:
                values.append(render_param(param))

        formatted = sprintf(message, values)
        if VALUE_TOKEN in formatted:
            formatted = formatted.replace(VALUE_TOKEN, render_value(value))

        self._errors.setdefault(field, []).append(formatted)
        return formatted

    def set_label(self, field: str, label: str) -> None:
        """Set the display label for a field."""
        self._labels[field] = label

    def set_labels(self, labels: dict[str, str]) -> None:
        """Merge several field labels, overriding existing ones."""
        self._labels.update(labels)

    @property
    def labels(self) -> dict[str, str]:
        """Current field labels."""
        return self._labels

    def clear_labels(self) -> None:
        self._labels = {}

    def copy(self, with_errors: bool = False) -> "ErrorManager":
        """
        Create an independent manager with the same labels and settings.

        Params:
            with_errors: Also copy the recorded errors

        Returns:
            A new ErrorManager that shares no mutable state with this one
        """
        clone = ErrorManager(prepend_labels=self.prepend_labels)
        clone._labels = dict(self._labels)
        if with_errors:
            clone._errors = {field: list(messages) for field, messages in self._errors.items()}
        return clone

    def _apply_labels(self, field: str, message: str, params: list[Any]) -> str:
        """Substitute {field} and {fieldN} tokens with labels."""
        if field in self._labels:
            message = message.replace(FIELD_TOKEN, self._labels[field])
        elif self.prepend_labels:
            message = message.replace(FIELD_TOKEN, auto_label(field))
        else:
            message = message.replace(FIELD_TOKEN + " ", "")

        for position, param in enumerate(params, start=1):
            tag = "{field%d}" % position
            if tag not in message:
                continue
            if isinstance(param, (str, int, float)) and not isinstance(param, bool):
                label = self._labels.get(str(param))
                if label is not None:
                    message = message.replace(tag, label)

        return message
