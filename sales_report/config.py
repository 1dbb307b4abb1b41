"""
Settings for the seller report service.

Every value can be overridden through the environment (or a local ``.env``).
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

APP_TITLE: str = os.getenv("APP_TITLE", "Seller Performance Report")
APP_VERSION: str = "1.0.0"
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# Best-selling products listed per seller; never more than MAX_TOP_PRODUCTS
MAX_TOP_PRODUCTS: int = 10
TOP_PRODUCTS_LIMIT: int = max(1, min(int(os.getenv("TOP_PRODUCTS_LIMIT", "10")), MAX_TOP_PRODUCTS))

# Seed for the deterministic demo dataset
SEED: int = int(os.getenv("SEED", "42"))


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
