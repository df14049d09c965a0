import logging

import pytest


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("ASYNC_UTF8_DECODER_CAPACITY", raising=False)


@pytest.fixture(autouse=True)
def _debug_logging(caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.DEBUG, logger="async_utf8_decoder")
