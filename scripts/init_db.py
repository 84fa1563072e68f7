from __future__ import annotations

import importlib

from dotenv import load_dotenv

from hcm_attendance.common.logging_config import configure_logging
from hcm_attendance.config import get_settings_module
from hcm_attendance.core.settings import Settings
from hcm_attendance.database.bootstrap import apply_schema, list_tables


def main() -> None:
    load_dotenv(override=False)
    settings = Settings.from_module(importlib.import_module(get_settings_module()))
    configure_logging(settings.log_level)
    db_config = settings.db_config

    apply_schema(db_config)
    tables = list_tables(db_config)
    print(
        "OK: Applied schema.sql -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
