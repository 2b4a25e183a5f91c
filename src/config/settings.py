# src/config/settings.py

"""Central configuration for the swipeshop application."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _default_backend() -> str:
    """Use Supabase when it is configured, otherwise the local store."""
    explicit = os.getenv("SWIPESHOP_BACKEND")
    if explicit:
        return explicit.strip().lower()
    return "supabase" if os.getenv("SUPABASE_URL") else "local"


class Settings:
    """Central configuration for the swipeshop application."""

    # --- Backend ---
    BACKEND: str = _default_backend()      # "supabase" or "local"
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    SUPABASE_KEY: str = os.getenv("SUPABASE_KEY", "")

    # --- Swipe gesture (pixel-equivalents) ---
    SWIPE_COMMIT_THRESHOLD: float = 100.0
    ROTATION_INPUT: list[float] = [-200.0, 200.0]
    ROTATION_OUTPUT: list[float] = [-25.0, 25.0]
    OPACITY_INPUT: list[float] = [-200.0, -100.0, 0.0, 100.0, 200.0]
    OPACITY_OUTPUT: list[float] = [0.0, 1.0, 1.0, 1.0, 0.0]
    LEFT_BADGE_INPUT: list[float] = [-200.0, -50.0, 0.0]
    LEFT_BADGE_OUTPUT: list[float] = [1.0, 0.0, 0.0]
    RIGHT_BADGE_INPUT: list[float] = [0.0, 50.0, 200.0]
    RIGHT_BADGE_OUTPUT: list[float] = [0.0, 0.0, 1.0]
    DRAG_PX_PER_CELL: float = 10.0      # one terminal column ~ 10px

    # --- Catalog ---
    DENY_LISTED_NAMES: list[str] = [
        "yes",
        "hr",
        "slim jean",
        "ripped jeans",
        "knit sweater",
        "trechn coart",
        "classic white shirt",
        "wireless headphones",
    ]
    CURRENCY_SYMBOL: str = "$"

    # --- Accounts ---
    DEMO_SELLER_EMAIL: str = os.getenv(
        "SWIPESHOP_DEMO_SELLER", "no@gmail.com"
    )
    DEMO_USER_EMAIL: str = os.getenv(
        "SWIPESHOP_DEMO_USER", "no1@gmail.com"
    )
    DEMO_PASSWORD: str = os.getenv("SWIPESHOP_DEMO_PASSWORD", "12345678")
    AUTO_PROVISION_ACCOUNTS: bool = (
        os.getenv("SWIPESHOP_AUTO_PROVISION", "1") != "0"
    )

    # --- Navigation ---
    ROUTES: list[str] = ["/auth", "/swipe", "/seller", "/cart", "/saved"]
    DEFAULT_ROUTE: str = "/auth"

    # --- Logging ---
    LOG_LEVEL: str = os.getenv("SWIPESHOP_LOG_LEVEL", "DEBUG").upper()
    LOG_RETENTION: int = int(os.getenv("SWIPESHOP_LOG_RETENTION", "20"))
    # httpx logs one INFO line per PostgREST / Auth request
    HTTP_LOG_LEVEL: str = "INFO"

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    DATA_DIR: Path = BASE_DIR / "data"
    LOGS_DIR: Path = BASE_DIR / "logs"
    CHARTS_DIR: Path = DATA_DIR / "charts"
    LOCAL_DB_PATH: Path = Path(
        os.getenv("SWIPESHOP_DB_PATH", str(DATA_DIR / "swipeshop.db"))
    )
