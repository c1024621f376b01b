"""Environment-driven settings for result interpretation and formatting."""

import os
from dataclasses import dataclass
from typing import Optional

SUPPORTED_CHART_TYPES = ("bar", "line", "pie")


def get_env_int(name: str, default: int, minimum: Optional[int] = None) -> int:
    """Get an environment variable as an integer."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        parsed = int(value)
    except ValueError:
        raise ValueError(f"Environment variable '{name}' must be an integer, got '{value}'.")
    if minimum is not None and parsed < minimum:
        raise ValueError(f"Environment variable '{name}' must be >= {minimum}, got {parsed}.")
    return parsed


def get_env_ratio(name: str, default: float) -> float:
    """Get an environment variable as a float in (0, 1]."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        parsed = float(value)
    except ValueError:
        raise ValueError(f"Environment variable '{name}' must be a float, got '{value}'.")
    if not 0 < parsed <= 1:
        raise ValueError(f"Environment variable '{name}' must be in (0, 1], got {parsed}.")
    return parsed


def get_env_bool(name: str, default: bool = False) -> bool:
    """Get an environment variable as a boolean.

    Truthy: true, 1, yes, on
    Falsey: false, 0, no, off, (empty string)
    """
    value = os.getenv(name)
    if value is None:
        return default

    val_lower = value.strip().lower()
    if val_lower in ("true", "1", "yes", "on"):
        return True
    if val_lower in ("false", "0", "no", "off", ""):
        return False

    raise ValueError(f"Environment variable '{name}' must be a boolean, got '{value}'.")


@dataclass(frozen=True)
class VizSettings:
    """Tunables for time detection, axis disambiguation and number display."""

    time_sample_size: int = 15
    time_like_ratio: float = 0.6
    swap_sample_rows: int = 20
    max_fraction_digits: int = 2
    thousands_separator: str = ","
    decimal_separator: str = "."
    default_chart_type: str = "bar"

    @classmethod
    def from_env(cls) -> "VizSettings":
        """Load settings from VIZ_* environment variables.

        Raises:
            ValueError: If a variable is set to an invalid value.
        """
        chart_type = (os.getenv("VIZ_DEFAULT_CHART_TYPE") or "bar").strip().lower()
        if chart_type not in SUPPORTED_CHART_TYPES:
            raise ValueError(
                f"Invalid VIZ_DEFAULT_CHART_TYPE: {chart_type}. "
                f"Must be one of {', '.join(SUPPORTED_CHART_TYPES)}"
            )

        thousands = os.getenv("VIZ_THOUSANDS_SEPARATOR", ",")
        decimal = os.getenv("VIZ_DECIMAL_SEPARATOR", ".") or "."
        if thousands == decimal:
            raise ValueError("VIZ_THOUSANDS_SEPARATOR and VIZ_DECIMAL_SEPARATOR must differ.")

        return cls(
            time_sample_size=get_env_int("VIZ_TIME_SAMPLE_SIZE", 15, minimum=1),
            time_like_ratio=get_env_ratio("VIZ_TIME_LIKE_RATIO", 0.6),
            swap_sample_rows=get_env_int("VIZ_SWAP_SAMPLE_ROWS", 20, minimum=1),
            max_fraction_digits=get_env_int("VIZ_MAX_FRACTION_DIGITS", 2, minimum=0),
            thousands_separator=thousands,
            decimal_separator=decimal,
            default_chart_type=chart_type,
        )


_settings: Optional[VizSettings] = None


def get_settings() -> VizSettings:
    """Return the process-wide settings, loading them from the environment once."""
    global _settings
    if _settings is None:
        _settings = VizSettings.from_env()
    return _settings


def reset_settings() -> None:
    """Drop cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
