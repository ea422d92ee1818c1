"""Shared fixtures for the asset server tests."""

import logging
import signal
import threading
import time

import pytest

import asset_server


INDEX_HTML = b"<!DOCTYPE html><html><body><flutter-view></flutter-view></body></html>"


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = logging.getLogger(asset_server.LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture(autouse=True)
def restore_signal_handlers():
    saved = {signum: signal.getsignal(signum) for signum in (signal.SIGINT, signal.SIGTERM)}
    yield
    for signum, handler in saved.items():
        signal.signal(signum, handler)


@pytest.fixture
def web_root(tmp_path):
    """A small Flutter-style web build next to a sibling directory sharing its prefix."""
    root = tmp_path / "web"
    root.mkdir()
    (root / "index.html").write_bytes(INDEX_HTML)
    (root / "style.css").write_bytes(b"body { margin: 0; }")
    (root / "main.dart.js").write_bytes(b"console.log('tetris');")
    (root / "canvaskit.WASM").write_bytes(b"\x00asm\x01\x00\x00\x00")
    (root / "LICENSE").write_bytes(b"no extension")
    (root / "assets").mkdir()
    (root / "assets" / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n" + bytes(range(256)))

    sibling = tmp_path / "web-evil"
    sibling.mkdir()
    (sibling / "secret.txt").write_bytes(b"secret")
    (tmp_path / "outside.txt").write_bytes(b"outside")
    return root


def make_config(root, **overrides):
    settings = dict(host="127.0.0.1", port=0, root=str(root), max_threads=4,
                    keep_alive_timeout=5, shutdown_timeout=3, log_file=None)
    settings.update(overrides)
    return asset_server.ServerConfig(**settings)


class ServerThread:
    """Runs AssetServer.serve() in a background thread."""

    def __init__(self, server):
        self.server = server
        self.result = None
        self.thread = threading.Thread(target=self._run, daemon=True)

    def _run(self):
        self.result = self.server.serve()

    def start(self):
        self.server.start()
        self.thread.start()
        return self

    def stop(self, timeout=10):
        self.server.shutdown()
        self.thread.join(timeout)
        return not self.thread.is_alive()


def wait_for(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.02)
    return predicate()


@pytest.fixture
def server_factory(web_root):
    started = []

    def factory(**overrides):
        server = asset_server.AssetServer(make_config(web_root, **overrides))
        runner = ServerThread(server).start()
        started.append(runner)
        return runner

    yield factory

    for runner in started:
        runner.stop()


@pytest.fixture
def running_server(server_factory):
    return server_factory().server
