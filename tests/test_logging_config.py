import logging

from volumenavigator.logging_config import LOG_LEVEL_ENV, resolve_level, setup_logging


def test_setup_is_idempotent(tmp_path):
    log_file = tmp_path / "navigator.log"
    setup_logging(level=logging.DEBUG)
    logger = setup_logging(level=logging.DEBUG, log_file=str(log_file))

    assert logger.name == "volumenavigator"
    assert len(logger.handlers) == 2
    assert logging.getLogger("pyvista").level == logging.WARNING

    logging.getLogger("volumenavigator.model.plane").debug("plane moved")
    for handler in logger.handlers:
        handler.flush()
    assert "plane moved" in log_file.read_text(encoding="utf-8")
    setup_logging()


def test_environment_overrides_level(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
    assert resolve_level(logging.WARNING) == logging.DEBUG

    monkeypatch.setenv(LOG_LEVEL_ENV, "not-a-level")
    assert resolve_level(logging.WARNING) == logging.WARNING
