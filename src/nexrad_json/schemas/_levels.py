"""Shared normalizers for configuration values."""

_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}


def normalize_log_level(v):
    """Accept ``warn``/``Info``/... and return the canonical upper-case name."""
    if isinstance(v, str):
        v = v.strip().upper()
        return _LEVEL_ALIASES.get(v, v)
    return v


def normalize_product(v):
    """Product identifiers are lower case (ref, vel, sw, rho)."""
    if isinstance(v, str):
        return v.strip().lower()
    return v


def normalize_elevations_til(v):
    """Any negative upper bound means single-elevation mode (-1)."""
    if isinstance(v, int) and not isinstance(v, bool) and v < -1:
        return -1
    return v
