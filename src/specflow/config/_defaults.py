"""Built-in configuration values, the lowest configuration layer.

Kept as a plain dict so it can be merged like any other layer; merging
copies it, so it is never mutated.
"""

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "logging": {
        "level": "info",
        "format": "json",
        "file": "",
    },
    "workflow": {
        "default_schema": "spec-driven",
        "schemas_dir": "",
    },
    "sync": {
        "validate": True,
    },
}
