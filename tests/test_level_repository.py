from concurrent.futures import ThreadPoolExecutor

import pytest

from pushbox.core.cells import Cell
from pushbox.engine.rules import MAP_SIZE
from pushbox.exceptions import LevelNotFoundError, MalformedLevelError
from pushbox.levels.repository import LevelRepository


class TestPackagedLevels:
    def test_level_one(self):
        repository = LevelRepository()
        data = repository.load(1)

        assert data.size == MAP_SIZE
        assert data.start == (8, 10)
        assert data.grid[9, 10] == Cell.BOX.value
        assert data.grid[10, 10] == Cell.TARGET.value

    def test_all_packaged_levels_are_winnable(self):
        repository = LevelRepository()
        assert repository.level_count >= 3
        for level in range(1, repository.level_count + 1):
            assert repository.load(level).is_winnable


class TestDirectoryLevels:
    def test_level_count_is_consecutive(self, levels_dir):
        (levels_dir / "4.map").write_text("ignored")
        repository = LevelRepository(levels_dir, size=4)

        assert repository.has_level(1)
        assert not repository.has_level(0)
        assert not repository.has_level(3)
        assert repository.level_count == 2

    def test_load(self, levels_dir):
        data = LevelRepository(levels_dir, size=4).load(2)
        assert data.start == (1, 2)

    def test_missing_level(self, levels_dir):
        with pytest.raises(LevelNotFoundError, match="Level 9 not found"):
            LevelRepository(levels_dir, size=4).load(9)

    def test_non_utf8(self, levels_dir):
        (levels_dir / "3.map").write_bytes(b"\xff\xfe\x00")
        with pytest.raises(MalformedLevelError, match="not UTF-8"):
            LevelRepository(levels_dir, size=4).load(3)

    def test_size_mismatch_is_malformed(self, levels_dir):
        with pytest.raises(MalformedLevelError, match="expected 20 rows"):
            LevelRepository(levels_dir).load(1)


class TestRequest:
    def test_resolved_future(self, levels_dir):
        future = LevelRepository(levels_dir, size=4).request(1)
        assert future.done()
        assert future.result().start == (1, 1)

    def test_failed_future_carries_error(self, levels_dir):
        future = LevelRepository(levels_dir, size=4).request(5)
        assert future.done()
        assert isinstance(future.exception(), LevelNotFoundError)

    def test_executor(self, levels_dir):
        with ThreadPoolExecutor(max_workers=1) as executor:
            repository = LevelRepository(levels_dir, size=4, executor=executor)
            future = repository.request(2)
            assert future.result(timeout=10).start == (1, 2)
