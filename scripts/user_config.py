"""Example user configuration for nexrad-json.

Pass with ``--config scripts/user_config.py``. Command-line flags still
override anything set here.
"""

CONFIG = {
    "PRODUCT": "ref",
    "ELEVATIONS_TIL": 3,
    "MINIMUM": 5.0,
    "OUTPUT": "output/radar",
    "LOG_LEVEL": "info",

    # Nested overrides (advanced)
    "output": {
        "indent": None,
    },
}
