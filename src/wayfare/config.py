"""Application configuration.

AppConfig is a frozen dataclass, so settings cannot change once the app is
built. Everything is set in code; nothing is read from the environment.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, port=8080, template_dir="templates")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 3000
    debug: bool = False

    # Views
    template_dir: str | Path = "views"
    autoescape: bool = True
    trim_blocks: bool = True
    lstrip_blocks: bool = True

    # Logging (dev server only; the library never installs handlers itself)
    log_level: str = "info"
