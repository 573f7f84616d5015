from __future__ import annotations

import logging
import os
import sys

from fast_rules.utils.env_utils import configure_env
from fast_rules.utils.logging import get_log_file_path, setup_logging


def test_configure_env_loads_explicit_file(tmp_path, monkeypatch):
    env_file = tmp_path / ".env.testing"
    env_file.write_text("VALIDATION_RESULT_CACHE=0\nMONGO_URI=mongodb://example:27017\n")
    monkeypatch.setenv("VALIDATION_RESULT_CACHE", "1")
    monkeypatch.setenv("MONGO_URI", "")

    configure_env(str(env_file))

    assert os.environ["VALIDATION_RESULT_CACHE"] == "0"
    assert os.environ["MONGO_URI"] == "mongodb://example:27017"


def test_logging_uses_custom_file_name(tmp_path, monkeypatch):
    monkeypatch.delenv("LOG_FILE_NAME", raising=False)
    root = logging.getLogger()
    previous_handlers = list(root.handlers)
    previous_level = root.level
    previous_excepthook = sys.excepthook

    try:
        setup_logging(log_file_name="validation.log", log_dir=tmp_path / "log")
        logging.debug("[VALIDATION] configured")

        path = get_log_file_path()
        assert path is not None
        assert path.name == "validation.log"
        assert path.parent.name == "log"
        assert path.exists()
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = previous_handlers
        root.setLevel(previous_level)
        sys.excepthook = previous_excepthook
