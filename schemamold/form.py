"""
Caller-side form state.

``FormSession`` pairs a schema with the current document and its errors,
the way a form layer holds them between edits. Sessions are immutable:
every edit returns a new session built with ``set_at_path`` and revalidated.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from .paths import JSON, Path, get_at_path, is_array, key_of, set_at_path
from .schema.core import Schema
from .schema.validation import ErrorsByPath, is_valid, messages_for, validate_field

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormSession:
    """Schema, current value and the errors for that value."""

    schema: Schema
    value: JSON = field(default_factory=dict)
    errors: ErrorsByPath = field(init=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "errors", validate_field(self.schema, self.value))

    @property
    def can_submit(self) -> bool:
        return is_valid(self.errors)

    def errors_for(self, path: Path) -> list[str]:
        """Messages to show next to the input at ``path``."""
        return messages_for(self.errors, path)

    def change(self, path: Path, value: JSON) -> "FormSession":
        """Return the session after writing ``value`` at ``path``."""
        logger.debug("Form change at %s", key_of(path))
        return FormSession(self.schema, set_at_path(self.value, path, value))

    def add_item(self, path: Path) -> "FormSession":
        """Append an empty (null) element to the array at ``path``."""
        current = get_at_path(self.value, path)
        items = list(current) if is_array(current) else []
        items.append(None)
        return self.change(path, items)

    def remove_item(self, path: Path, index: int) -> "FormSession":
        """Drop element ``index`` from the array at ``path``; out of range is a no-op."""
        current = get_at_path(self.value, path)
        items = list(current) if is_array(current) else []
        return self.change(path, [item for i, item in enumerate(items) if i != index])

    def submit(self, on_submit: Callable[[JSON], object]) -> bool:
        """Call ``on_submit`` with the value if it validates; return whether it was called."""
        errors = validate_field(self.schema, self.value)
        if not is_valid(errors):
            logger.info("Submit blocked: %d path(s) with errors", len(errors))
            return False
        on_submit(self.value)
        return True
