from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from porter_payroll.config import get_settings_module
from porter_payroll.database.bootstrap import apply_seed_sql, ensure_admin_user
from porter_payroll.database.connection import DBConfig


def main() -> None:
    """Admin account, the three carriers and sample porters, locations and routes."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config)
    ensure_admin_user(
        db_config,
        name=getattr(settings, "SEED_ADMIN_NAME", "Administrator"),
        email=getattr(settings, "SEED_ADMIN_EMAIL", "admin@example.com"),
        password=getattr(settings, "SEED_ADMIN_PASSWORD", "admin123"),
    )

    print(f"OK: Seeded database -> {DBConfig.from_dict(db_config).describe()}")


if __name__ == "__main__":
    main()
