import logging
import threading

import numpy as np
import pytest

from geokernel import (
    KernelConfig,
    Point,
    congruent_sss,
    get_kernel_config,
    kernel_tolerance,
    mk_nondegenerate_triangle,
    set_kernel_config,
)
from geokernel.logging_utils import debug_log_call, summarize


def test_kernel_tolerance_restores_previous_config():
    before = get_kernel_config()

    with kernel_tolerance(abs_tol=1e-3) as active:
        assert active.abs_tol == 1e-3
        assert active.angle_tol == before.angle_tol
        assert Point(0.0, 0.0).is_close(Point(5e-4, 0.0))

    assert get_kernel_config() == before
    assert not Point(0.0, 0.0).is_close(Point(5e-4, 0.0))


def test_kernel_tolerance_restores_after_errors():
    before = get_kernel_config()

    with pytest.raises(RuntimeError):
        with kernel_tolerance(angle_tol=0.5):
            raise RuntimeError("boom")

    assert get_kernel_config() == before


def test_config_is_copied_in_and_out():
    before = get_kernel_config()
    try:
        config = KernelConfig(abs_tol=1e-6)
        set_kernel_config(config)
        config.abs_tol = 1.0
        assert get_kernel_config().abs_tol == 1e-6

        snapshot = get_kernel_config()
        snapshot.abs_tol = 2.0
        assert get_kernel_config().abs_tol == 1e-6
    finally:
        set_kernel_config(before)


def test_tolerance_override_stays_in_its_own_thread():
    entered = threading.Event()
    release = threading.Event()
    seen_in_worker = []

    def worker():
        with kernel_tolerance(abs_tol=1e-3):
            seen_in_worker.append(Point(0.0, 0.0).is_close(Point(5e-4, 0.0)))
            entered.set()
            release.wait(timeout=5.0)

    thread = threading.Thread(target=worker)
    thread.start()
    try:
        assert entered.wait(timeout=5.0)
        assert get_kernel_config().abs_tol == 1e-9
        assert not Point(0.0, 0.0).is_close(Point(5e-4, 0.0))
    finally:
        release.set()
        thread.join()

    assert seen_in_worker == [True]


def test_overlapping_overrides_restore_in_each_thread():
    barrier = threading.Barrier(2)
    restored = {}

    def worker(name, tol):
        with kernel_tolerance(abs_tol=tol):
            barrier.wait(timeout=5.0)
        barrier.wait(timeout=5.0)
        restored[name] = get_kernel_config().abs_tol

    threads = [
        threading.Thread(target=worker, args=("loose", 1e-2)),
        threading.Thread(target=worker, args=("tight", 1e-6)),
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert restored == {"loose": 1e-9, "tight": 1e-9}
    assert get_kernel_config().abs_tol == 1e-9


def test_set_kernel_config_in_a_thread_is_local_to_it():
    def worker():
        set_kernel_config(KernelConfig(abs_tol=0.5))

    thread = threading.Thread(target=worker)
    thread.start()
    thread.join()

    assert get_kernel_config().abs_tol == 1e-9


def test_negative_tolerance_is_rejected():
    with pytest.raises(ValueError):
        KernelConfig(abs_tol=-1.0)
    with pytest.raises(ValueError):
        with kernel_tolerance(angle_tol=-1e-9):
            pass


def test_congruence_calls_are_traced_at_debug(caplog):
    caplog.set_level(logging.DEBUG, logger="geokernel.congruence")
    t1 = mk_nondegenerate_triangle((0.0, 0.0), (4.0, 0.0), (0.0, 3.0))

    congruent_sss(t1, t1)

    messages = [r.getMessage() for r in caplog.records if r.name == "geokernel.congruence"]
    assert any(m.startswith("-> congruent_sss(") for m in messages)
    assert any(m.startswith("<- congruent_sss = CongruenceResult(") for m in messages)


def test_debug_wrapper_reports_failures(caplog):
    logger = logging.getLogger("geokernel.tests")
    caplog.set_level(logging.DEBUG, logger="geokernel.tests")

    @debug_log_call(logger)
    def explode(value):
        raise ValueError(f"bad {value}")

    with pytest.raises(ValueError):
        explode(3)

    assert any("!! " in r.getMessage() and "raised ValueError: bad 3" in r.getMessage() for r in caplog.records)


def test_summarize_arrays_and_long_sequences():
    assert summarize(np.zeros((2, 2))) == "ndarray(shape=(2, 2), dtype=float64, values=[[0.0, 0.0], [0.0, 0.0]])"
    assert "min=0, max=99" in summarize(np.arange(100.0))
    assert summarize(list(range(10))).endswith("... (10 items)]")
