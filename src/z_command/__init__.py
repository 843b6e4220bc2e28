"""Install curated AI coding assistant skills and agents for your project."""

__version__ = "1.1.0"

# Export protocol interfaces for type hints and dependency injection
from z_command.protocols import (
    AssetInstaller,
    AssetSource,
    FileSystem,
)

__all__ = [
    "__version__",
    "AssetInstaller",
    "AssetSource",
    "FileSystem",
]
