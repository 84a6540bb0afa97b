import logging

from crcdiff.logging import configure_logger
from crcdiff.manifest import parse_manifest_lines


def _close_file_handlers(logger):
    for handler in list(logger.handlers):
        if isinstance(handler, logging.FileHandler):
            logger.removeHandler(handler)
            handler.close()


def test_file_handler_is_attached_once(tmp_path):
    log_file = tmp_path / "run.log"
    logger = configure_logger(log_file)
    try:
        configure_logger(log_file)
        file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
        assert len([h for h in file_handlers if h.baseFilename == str(log_file.resolve())]) == 1
        assert logger.propagate is False
    finally:
        _close_file_handlers(logger)


def test_malformed_lines_are_logged(tmp_path):
    log_file = tmp_path / "run.log"
    logger = configure_logger(log_file)
    try:
        parse_manifest_lines(["ok 1", "broken"], source="snap.txt")
        for handler in logger.handlers:
            handler.flush()
        text = log_file.read_text(encoding="utf-8")
    finally:
        _close_file_handlers(logger)

    assert "WARNING Malformed line in snap.txt (line 2): missing separator: 'broken'" in text
