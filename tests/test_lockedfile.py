import pytest

from ttkkit.lockedfile import LockedFile, LockMode


@pytest.fixture
def lock_path(tmp_path):
    return tmp_path / "resource.lock"


def _opened(path):
    locked = LockedFile(path)
    locked.open("r+")
    return locked


def test_truncate_mode_rejected(lock_path):
    with pytest.raises(ValueError):
        LockedFile(lock_path).open("w")


def test_unknown_mode_rejected(lock_path):
    with pytest.raises(ValueError):
        LockedFile(lock_path).open("rb+x")


def test_open_without_name_rejected():
    with pytest.raises(ValueError):
        LockedFile().open()


def test_read_only_open_of_missing_file_fails(lock_path):
    with pytest.raises(FileNotFoundError):
        LockedFile(lock_path).open("r")


def test_read_write_open_creates_file(lock_path):
    locked = _opened(lock_path)
    try:
        assert lock_path.exists()
        assert locked.is_open()
    finally:
        locked.close()


def test_lock_requires_open_file(lock_path):
    locked = LockedFile(lock_path)
    with pytest.raises(ValueError):
        locked.lock(LockMode.WRITE_LOCK)
    with pytest.raises(ValueError):
        locked.unlock()


def test_write_lock_excludes_others(lock_path):
    first, second = _opened(lock_path), _opened(lock_path)
    try:
        assert first.lock(LockMode.WRITE_LOCK, block=False) is True
        assert first.lock_mode() is LockMode.WRITE_LOCK
        assert second.lock(LockMode.WRITE_LOCK, block=False) is False
        assert second.lock(LockMode.READ_LOCK, block=False) is False
        assert second.is_locked() is False
    finally:
        first.close()
        second.close()


def test_read_locks_are_shared(lock_path):
    first, second, third = _opened(lock_path), _opened(lock_path), _opened(lock_path)
    try:
        assert first.lock(LockMode.READ_LOCK, block=False) is True
        assert second.lock(LockMode.READ_LOCK, block=False) is True
        assert third.lock(LockMode.WRITE_LOCK, block=False) is False
    finally:
        for locked in (first, second, third):
            locked.close()


def test_unlock_lets_others_lock(lock_path):
    first, second = _opened(lock_path), _opened(lock_path)
    try:
        assert first.lock(LockMode.WRITE_LOCK, block=False)
        assert first.unlock() is True
        assert first.is_locked() is False
        assert second.lock(LockMode.WRITE_LOCK, block=False) is True
    finally:
        first.close()
        second.close()


def test_lock_no_lock_releases(lock_path):
    locked = _opened(lock_path)
    try:
        assert locked.lock(LockMode.WRITE_LOCK)
        assert locked.lock(LockMode.NO_LOCK) is True
        assert locked.lock_mode() is LockMode.NO_LOCK
    finally:
        locked.close()


def test_relock_same_and_other_mode(lock_path):
    locked = _opened(lock_path)
    try:
        assert locked.lock(LockMode.READ_LOCK, block=False)
        assert locked.lock(LockMode.READ_LOCK, block=False) is True
        assert locked.lock(LockMode.WRITE_LOCK, block=False) is True
        assert locked.lock_mode() is LockMode.WRITE_LOCK
    finally:
        locked.close()


def test_context_manager_releases_on_exit(lock_path):
    with LockedFile(lock_path) as first:
        assert first.lock(LockMode.WRITE_LOCK, block=False)
    assert first.is_open() is False
    assert first.is_locked() is False
    second = _opened(lock_path)
    try:
        assert second.lock(LockMode.WRITE_LOCK, block=False) is True
    finally:
        second.close()


def test_double_open_rejected(lock_path):
    locked = _opened(lock_path)
    try:
        with pytest.raises(ValueError):
            locked.open("r+")
    finally:
        locked.close()