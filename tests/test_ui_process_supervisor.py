from __future__ import annotations

import os
import sys
import time

import pytest


def _ensure_qapp():
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


def _pump_until(app, predicate, timeout_s: float = 10.0) -> None:
    deadline = time.monotonic() + timeout_s
    while not predicate() and time.monotonic() < deadline:
        app.processEvents()
        time.sleep(0.01)


def test_exit_is_reported_once_with_returncode() -> None:
    app = _ensure_qapp()
    from bloomsplash_ui.process_supervisor import ProcessSupervisor

    sup = ProcessSupervisor()
    seen: list[int] = []
    sup.exited.connect(seen.append)

    pid = sup.spawn([sys.executable, "-c", "raise SystemExit(3)"], dict(os.environ))
    assert pid == sup.pid

    _pump_until(app, lambda: bool(seen))
    # Keep pumping a little to make sure nothing is emitted twice.
    for _ in range(10):
        app.processEvents()

    assert seen == [3]
    assert sup.has_exited()


def test_child_receives_arguments_and_environment(tmp_path) -> None:
    app = _ensure_qapp()
    from bloomsplash_ui.process_supervisor import ProcessSupervisor

    out = tmp_path / "out.txt"
    script = (
        "import os, sys; "
        "open(sys.argv[1], 'w').write(os.environ['BLOOM_TEST'] + '|' + sys.argv[2])"
    )
    env = dict(os.environ, BLOOM_TEST="from-env")

    sup = ProcessSupervisor()
    seen: list[int] = []
    sup.exited.connect(seen.append)
    sup.spawn([sys.executable, "-c", script, str(out), "a b"], env)
    _pump_until(app, lambda: bool(seen))

    assert seen == [0]
    assert out.read_text() == "from-env|a b"


def test_spawn_failure_raises_spawn_error(tmp_path) -> None:
    _ensure_qapp()
    from bloomsplash_ui.process_supervisor import ProcessSupervisor, SpawnError

    sup = ProcessSupervisor()
    with pytest.raises(SpawnError, match="cannot start"):
        sup.spawn([str(tmp_path / "no-such-mono")], {})
    assert sup.pid is None


def test_empty_argv_is_rejected() -> None:
    _ensure_qapp()
    from bloomsplash_ui.process_supervisor import ProcessSupervisor, SpawnError

    with pytest.raises(SpawnError, match="empty"):
        ProcessSupervisor().spawn([], {})


def test_second_spawn_raises() -> None:
    app = _ensure_qapp()
    from bloomsplash_ui.process_supervisor import ProcessSupervisor

    sup = ProcessSupervisor()
    seen: list[int] = []
    sup.exited.connect(seen.append)
    sup.spawn([sys.executable, "-c", "pass"], dict(os.environ))

    with pytest.raises(RuntimeError, match="already spawned"):
        sup.spawn([sys.executable, "-c", "pass"], dict(os.environ))

    _pump_until(app, lambda: bool(seen))


def test_release_leaves_child_running() -> None:
    _ensure_qapp()
    from bloomsplash_ui.process_supervisor import ProcessSupervisor

    sup = ProcessSupervisor()
    sup.spawn([sys.executable, "-c", "import time; time.sleep(0.5)"], dict(os.environ))
    child = sup._process  # noqa: SLF001

    sup.release()

    assert child.poll() is None
    assert child.wait(timeout=10) == 0
    assert not sup.has_exited()


@pytest.mark.parametrize(
    "failure",
    [OSError(38, "Function not implemented"), PermissionError(1, "Operation not permitted")],
)
def test_missing_pidfd_support_still_reports_exit(monkeypatch, failure) -> None:
    app = _ensure_qapp()
    import bloomsplash_ui.process_supervisor as ps

    def _no_pidfd(_pid):
        raise failure

    monkeypatch.setattr(ps.os, "pidfd_open", _no_pidfd, raising=False)

    sup = ps.ProcessSupervisor()
    seen: list[int] = []
    sup.exited.connect(seen.append)

    # The child is already running when pidfd_open fails, so spawn must not raise.
    pid = sup.spawn([sys.executable, "-c", "raise SystemExit(5)"], dict(os.environ))
    assert pid == sup.pid

    _pump_until(app, lambda: bool(seen))
    for _ in range(10):
        app.processEvents()

    assert seen == [5]
    assert sup.has_exited()


def test_missing_pidfd_open_function_falls_back(monkeypatch) -> None:
    app = _ensure_qapp()
    import bloomsplash_ui.process_supervisor as ps

    monkeypatch.delattr(ps.os, "pidfd_open", raising=False)

    sup = ps.ProcessSupervisor()
    seen: list[int] = []
    sup.exited.connect(seen.append)
    sup.spawn([sys.executable, "-c", "pass"], dict(os.environ))

    _pump_until(app, lambda: bool(seen))
    assert seen == [0]
