import json
import logging
from pathlib import Path

import structlog


def test_initialize(tmp_path: Path) -> None:
    import identity_user_import._cli_log as uut

    uut.initialize(tmp_path / "logs", logging.WARNING, logging.INFO)
    try:
        log = structlog.get_logger("identity_user_import.test")
        log.debug("not written")
        log.info("read users", count=3)

        root = logging.getLogger("identity_user_import")
        for h in root.handlers:
            h.flush()

        (log_file,) = (tmp_path / "logs").glob("iduser-*.log")
        lines = log_file.read_text().splitlines()
        assert len(lines) == 1
        entry = json.loads(lines[0])
        assert entry["event"] == "read users"
        assert entry["count"] == 3
        assert entry["level"] == "info"
    finally:
        root = logging.getLogger("identity_user_import")
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        structlog.reset_defaults()
