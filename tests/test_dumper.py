import inspect
import signal

from ttkkit.dumper import VERSION, Dumper


def test_dump_file_name_format():
    dumper = Dumper()
    assert dumper.dump_file_name(1700000000) == f"TTK_{VERSION}.1700000000.dmp"


def test_dump_file_name_uses_name_and_version():
    dumper = Dumper(name="Weather", version="1.0")
    assert dumper.dump_file_name(42.9) == "Weather_1.0.42.dmp"


def test_dump_file_name_defaults_to_now():
    name = Dumper().dump_file_name()
    stamp = name[len(f"TTK_{VERSION}."):-len(".dmp")]
    assert stamp.isdigit()
    assert name.endswith(".dmp")


def test_write_dump_records_stack(tmp_path):
    dumper = Dumper(directory=tmp_path)
    path = dumper.write_dump(15, inspect.currentframe())
    assert path.parent == tmp_path
    text = path.read_text(encoding="utf-8")
    assert text.startswith("signal 15\n")
    assert "test_write_dump_records_stack" in text


def test_write_dump_without_frame(tmp_path):
    path = Dumper(directory=tmp_path).write_dump(2, None)
    assert path.read_text(encoding="utf-8") == "signal 2\n"


def test_run_installs_and_close_restores_handlers():
    before = signal.getsignal(signal.SIGTERM)
    dumper = Dumper()
    dumper.run()
    try:
        assert signal.getsignal(signal.SIGTERM) == dumper.handle_signal
        assert signal.getsignal(signal.SIGINT) == dumper.handle_signal
    finally:
        dumper.close()
    assert signal.getsignal(signal.SIGTERM) == before


def test_close_calls_functor():
    calls = []
    with Dumper(lambda: calls.append(1)):
        assert calls == []
    assert calls == [1]


def test_close_without_run_keeps_handlers_and_dumps(tmp_path):
    before = signal.getsignal(signal.SIGTERM)
    dumper = Dumper(directory=tmp_path)
    dumper.close()
    assert signal.getsignal(signal.SIGTERM) == before
    path = dumper.write_dump(9, None)
    assert path.read_text(encoding="utf-8") == "signal 9\n"