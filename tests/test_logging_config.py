import logging
import sys
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parent.parent / "src"))
from tweakmenu.utils import logging_config
from tweakmenu.views.gui import TweakMenuApp, WidgetLoggerHandler


@pytest.fixture
def isolated_root():
    root = logging.getLogger()
    old_handlers = root.handlers[:]
    old_level = root.level
    root.handlers = []
    try:
        yield root
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers = old_handlers
        root.setLevel(old_level)


def test_configure_explicit_level(isolated_root, monkeypatch):
    monkeypatch.delenv("LOG_FILE_PATH", raising=False)
    logging_config.configure("debug")
    assert isolated_root.level == logging.DEBUG
    assert len(isolated_root.handlers) == 1


def test_configure_reads_environment(isolated_root, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    monkeypatch.delenv("LOG_FILE_PATH", raising=False)
    logging_config.configure()
    assert isolated_root.level == logging.WARNING


def test_configure_unknown_level_defaults_to_info(isolated_root, monkeypatch):
    monkeypatch.delenv("LOG_FILE_PATH", raising=False)
    logging_config.configure("chatty")
    assert isolated_root.level == logging.INFO


def test_configure_log_file(isolated_root, tmp_path, monkeypatch):
    log_file = tmp_path / "menu.log"
    monkeypatch.setenv("LOG_FILE_PATH", str(log_file))
    logging_config.configure("INFO")
    assert any(isinstance(h, RotatingFileHandler) for h in isolated_root.handlers)
    logging.getLogger("tweakmenu.test").info("hello")
    for handler in isolated_root.handlers:
        handler.flush()
    assert "INFO:tweakmenu.test:hello" in log_file.read_text(encoding="utf-8")


class DummyText:
    def __init__(self):
        self.lines = []
        self.seen = 0

    def insert(self, index, value):
        self.lines.append(value)

    def see(self, index):
        self.seen += 1

    def after(self, delay, callback):
        callback()


def test_widget_logger_appends_messages(isolated_root):
    widget = DummyText()
    handler = WidgetLoggerHandler(widget)
    handler.setFormatter(logging.Formatter("%(message)s"))
    isolated_root.addHandler(handler)
    isolated_root.setLevel(logging.INFO)
    logging.getLogger("tweakmenu.features").info("Regen enabled")
    assert widget.lines == ["Regen enabled\n"]
    assert widget.seen == 1


def test_widget_logger_from_background_thread(isolated_root):
    widget = DummyText()
    handler = WidgetLoggerHandler(widget)
    handler.setFormatter(logging.Formatter("%(message)s"))
    isolated_root.addHandler(handler)
    isolated_root.setLevel(logging.INFO)

    thread = threading.Thread(target=lambda: logging.getLogger("tweakmenu").info("from thread"))
    thread.start()
    thread.join()

    assert widget.lines == ["from thread\n"]


def test_app_refresh_reaches_every_view():
    class DummyView:
        def __init__(self):
            self.count = 0

        def refresh(self):
            self.count += 1

    app = TweakMenuApp.__new__(TweakMenuApp)
    app.views = [DummyView(), DummyView()]
    app.refresh()
    assert [view.count for view in app.views] == [1, 1]
