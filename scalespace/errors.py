import logging
from typing import Any, Dict

logger = logging.getLogger(__name__)


class ScaleSpaceError(ValueError):
    """
    Base error carrying a structured payload.

    Args:
        code: Error code following CATEGORY.SPECIFIC_ERROR pattern
        title: Human-readable error title
        detail: Specific details about this error instance
        tip: Actionable guidance for resolving the error
    """

    def __init__(self, code: str, title: str, detail: str = "", tip: str = ""):
        self.code = code
        self.title = title
        self.detail = detail
        self.tip = tip
        super().__init__(f"{code}: {title}" + (f" - {detail}" if detail else ""))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "title": self.title,
            "detail": self.detail,
            "tip": self.tip
        }


class UnitError(ScaleSpaceError):
    """A value was supplied without units or with the wrong physical dimension."""


class ConfigError(ScaleSpaceError):
    """Configuration could not be loaded or validated."""


def unit_mismatch(expected: str, value: Any, name: str = "value") -> UnitError:
    """
    Build a UnitError for a value that is not a quantity of the expected dimension.

    Args:
        expected: Expected physical dimension ("length" or "angle")
        value: The offending value
        name: Parameter name for the error detail

    Returns:
        UnitError ready to be raised
    """
    if hasattr(value, "units"):
        code = "UNIT.DIMENSION_MISMATCH"
        detail = f"{name} has units '{value.units}', expected a {expected}."
    else:
        code = "UNIT.MISSING"
        detail = f"{name} is a bare {type(value).__name__} ({value!r}), expected a {expected}."

    error = UnitError(
        code,
        f"Expected a {expected} quantity",
        detail,
        f"Build the value with scalespace.units.{expected}(value, unit)."
    )
    logger.warning(f"Unit error: {error.code} - {error.detail}")
    return error


def invalid_config(detail: str, tip: str = "Check the configuration file and environment overrides.") -> ConfigError:
    """
    Build a ConfigError for a configuration that failed to load or validate.

    Args:
        detail: What was wrong
        tip: Resolution tip

    Returns:
        ConfigError ready to be raised
    """
    error = ConfigError("CONFIG.INVALID", "Configuration validation failed", detail, tip)
    logger.error(f"Config error: {error.code} - {detail}")
    return error
