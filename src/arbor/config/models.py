#
# config/models.py
#
"""
Attrs-based data models for arbor run configuration.
"""

from typing import Any

from attrs import define, field

REPORTER_NAMES = ("info", "spec", "dots", "singleline", "xunit")
FORMATTER_NAMES = ("posix", "vs")


# --- Validators ---
def _validate_choice(choices: tuple[str, ...]):
    def _validator(inst: Any, attr: Any, value: str) -> None:
        if value not in choices:
            raise ValueError(f"Invalid {attr.name} '{value}'. Must be one of {list(choices)}.")

    return _validator


def _validate_patterns(inst: Any, attr: Any, value: tuple[str, ...]) -> None:
    """Validator ensures every filter pattern is a non-empty string."""
    for pattern in value:
        if not isinstance(pattern, str) or not pattern:
            raise ValueError(f"Field '{attr.name}' must only contain non-empty strings, got {pattern!r}")


def _to_tuple(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(value)


@define(frozen=True, slots=True)
class RunOptions:
    """Options controlling a single run of the harness."""

    reporter: str = field(default="info", validator=_validate_choice(REPORTER_NAMES))
    formatter: str = field(default="posix", validator=_validate_choice(FORMATTER_NAMES))
    color: bool = field(default=True)
    skip: tuple[str, ...] = field(factory=tuple, converter=_to_tuple, validator=_validate_patterns)
    only: tuple[str, ...] = field(factory=tuple, converter=_to_tuple, validator=_validate_patterns)
    break_on_failure: bool = field(default=False)
    dry_run: bool = field(default=False)

# 🔼⚙️
