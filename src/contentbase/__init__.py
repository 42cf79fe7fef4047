"""ContentBase - runtime-defined content types.

Operators define collections (tables with a caller-chosen column schema)
at runtime and manage their records through a schema-validated engine.
"""

__version__ = "0.1.0"

from contentbase.infrastructure.api.app import app

__all__ = ["app", "__version__"]
