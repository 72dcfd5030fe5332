import os, sys
sys.path.append(os.path.join(os.path.dirname(__file__), 'src'))

import logging

import logging_config


def test_setup_logging_writes_to_stderr(monkeypatch):
    calls = []
    monkeypatch.setattr(logging_config, "_logging_configured", False)
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    logger = logging_config.setup_logging()

    assert logger.name == "plagiarism"
    (handler,) = calls[0]["handlers"]
    assert isinstance(handler, logging.StreamHandler)
    assert handler.stream is sys.stderr


def test_get_logger_namespace():
    assert logging_config.get_logger("detector").name == "plagiarism.detector"
