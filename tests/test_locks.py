from __future__ import annotations

import threading

import pytest

from persistence.locks import PathLockRegistry, ReadWriteLock


def test_readers_share_the_lock():
    lock = ReadWriteLock()
    both_inside = threading.Barrier(2, timeout=2)
    errors: list[BaseException] = []

    def reader() -> None:
        try:
            with lock.read_locked():
                both_inside.wait()
        except BaseException as e:  # surfaced in the main thread below
            errors.append(e)

    threads = [threading.Thread(target=reader) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)
    assert errors == []


def test_writer_excludes_readers():
    lock = ReadWriteLock()
    entered = threading.Event()

    def reader() -> None:
        with lock.read_locked():
            entered.set()

    lock.acquire_write()
    t = threading.Thread(target=reader)
    t.start()
    try:
        assert not entered.wait(0.2)
    finally:
        lock.release_write()
    assert entered.wait(2)
    t.join(timeout=2)


def test_reader_excludes_writer():
    lock = ReadWriteLock()
    entered = threading.Event()

    def writer() -> None:
        with lock.write_locked():
            entered.set()

    lock.acquire_read()
    t = threading.Thread(target=writer)
    t.start()
    try:
        assert not entered.wait(0.2)
    finally:
        lock.release_read()
    assert entered.wait(2)
    t.join(timeout=2)


def test_release_without_acquire_raises():
    lock = ReadWriteLock()
    with pytest.raises(RuntimeError):
        lock.release_read()
    with pytest.raises(RuntimeError):
        lock.release_write()


def test_lock_released_when_body_raises():
    lock = ReadWriteLock()
    with pytest.raises(ValueError):
        with lock.write_locked():
            raise ValueError("boom")
    # would block forever if the write lock leaked
    with lock.read_locked():
        pass


def test_registry_returns_one_lock_per_resolved_path(tmp_path, monkeypatch):
    registry = PathLockRegistry()
    monkeypatch.chdir(tmp_path)

    a = registry.lock_for(tmp_path / "db.json")
    b = registry.lock_for(tmp_path / "sub" / ".." / "db.json")
    c = registry.lock_for(type(tmp_path)("db.json"))
    other = registry.lock_for(tmp_path / "other.json")

    assert a is b is c
    assert other is not a
