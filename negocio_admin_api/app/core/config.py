"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
application starts with no environment at all, seeded with the sample
catalog used for demonstrations.  Tests build their own ``Settings``
instance and pass it to ``create_app`` instead of touching the
environment.
"""

import os
from dataclasses import dataclass, field
from typing import Optional


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = field(default_factory=lambda: os.getenv("PROJECT_NAME", "Negócio Admin API"))
    api_version: str = field(default_factory=lambda: os.getenv("API_VERSION", "1.0.0"))
    api_prefix: str = field(default_factory=lambda: os.getenv("API_PREFIX", "/api"))
    debug: bool = field(default_factory=lambda: _env_bool("DEBUG", "false"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: Optional[str] = field(default_factory=lambda: os.getenv("LOG_FILE") or None)

    # When enabled the storage is populated at startup with the fixed
    # sample suppliers, products, clients, orders and deliveries.
    seed_sample_data: bool = field(default_factory=lambda: _env_bool("SEED_SAMPLE_DATA", "true"))

    # Order display numbers start right above this value.
    order_number_seed: int = field(default_factory=lambda: int(os.getenv("ORDER_NUMBER_SEED", "1000")))

    # Default size of the ``/orders/recent`` listing shown on the dashboard.
    recent_orders_limit: int = field(default_factory=lambda: int(os.getenv("RECENT_ORDERS_LIMIT", "5")))

    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.
settings = Settings()
