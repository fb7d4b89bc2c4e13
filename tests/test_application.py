import shutil
import tempfile
import threading

import pytest

from ttkkit.application import Application, CoreApplication


@pytest.fixture
def short_dir():
    path = tempfile.mkdtemp(prefix="ta")
    yield path
    shutil.rmtree(path, ignore_errors=True)


class FakeWindow:
    def __init__(self):
        self.minimized = True
        self.raised = 0
        self.activated = 0

    def raise_(self):
        self.raised += 1

    def activate(self):
        self.activated += 1


def _serve(app, results):
    results.append(app.process_messages(timeout=5.0))


def test_id_is_kept(short_dir):
    with CoreApplication("appalpha", short_dir) as app:
        assert app.id() == "appalpha"


def test_first_instance_is_not_running_second_is(short_dir):
    with CoreApplication("appbeta", short_dir) as first:
        assert first.is_running() is False
        with CoreApplication("appbeta", short_dir) as second:
            assert second.is_running() is True
        assert first.is_running() is False


def test_server_cannot_send_to_itself(short_dir):
    with CoreApplication("appgamma", short_dir) as app:
        assert app.is_running() is False
        assert app.send_message("hello") is False


def test_message_reaches_running_instance(short_dir):
    received = []
    results = []
    with CoreApplication("appdelta", short_dir) as server:
        server.connect(received.append)
        assert server.is_running() is False
        thread = threading.Thread(target=_serve, args=(server, results))
        thread.start()
        with CoreApplication("appdelta", short_dir) as client:
            assert client.send_message("hello") is True
        thread.join(10)
    assert results == ["hello"]
    assert received == ["hello"]


def test_process_messages_without_server_role_returns_none(short_dir):
    with CoreApplication("appeps", short_dir) as app:
        assert app.process_messages(timeout=0.1) is None


def test_activate_window_restores_window(short_dir):
    window = FakeWindow()
    with Application("appzeta", short_dir) as app:
        app.set_activation_window(window)
        assert app.activation_window() is window
        app.activate_window()
    assert window.minimized is False
    assert (window.raised, window.activated) == (1, 1)


def test_activate_without_window_is_harmless(short_dir):
    with Application("appeta", short_dir) as app:
        app.activate_window()
        assert app.activation_window() is None


@pytest.mark.parametrize("activate_on_message, expected", [(True, 1), (False, 0)])
def test_message_activates_window_when_asked(short_dir, activate_on_message, expected):
    window = FakeWindow()
    received = []
    results = []
    with Application("apptheta", short_dir) as server:
        server.set_activation_window(window, activate_on_message)
        server.connect(received.append)
        assert server.is_running() is False
        thread = threading.Thread(target=_serve, args=(server, results))
        thread.start()
        with Application("apptheta", short_dir) as client:
            assert client.send_message("wake") is True
        thread.join(10)
    assert received == ["wake"]
    assert window.activated == expected
    assert window.minimized is (expected == 0)