"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, port=3000)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8090
    debug: bool = False

    # Reload (development mode — requires debug=True)
    reload_dirs: tuple[str, ...] = ()

    # Limits
    max_content_length: int = 1024 * 1024  # 1 MB

    # Logging
    log_level: str = "info"
