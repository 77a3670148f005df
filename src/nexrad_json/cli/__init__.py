"""Command-line interface for nexrad-json.

This package contains the core execution logic, making scripts/ optional.
"""

from nexrad_json.cli.run_nexrad import run_nexrad_json, main

__all__ = ['run_nexrad_json', 'main']
