"""Tests for organize stage."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from psp_photo_organizer.config import OrganizerConfig
from psp_photo_organizer.errors import ConfigError
from psp_photo_organizer.models import DirectoryResult
from psp_photo_organizer.stages.organize import run


class TestOrganizeStage:
    def _source(self, tmp_path, count=3):
        src = tmp_path / "src"
        src.mkdir()
        files = []
        for i in range(1, count + 1):
            f = src / f"page{i}.jpg"
            f.write_bytes(f"page {i}".encode())
            files.append(f)
        return src, files

    def _run(self, tmp_path, files, dry_run=False, **config_kwargs):
        target = tmp_path / "out"
        config = OrganizerConfig(_env_file=None, **config_kwargs)
        result = DirectoryResult(source=tmp_path / "src", target=target)
        outputs = run(
            files=files,
            source_dir=tmp_path / "src",
            target_dir=target,
            config=config,
            result=result,
            dry_run=dry_run,
        )
        return target, outputs, result

    def test_comic_mode_names(self, tmp_path):
        _, files = self._source(tmp_path, 12)
        target, outputs, result = self._run(tmp_path, files, comic_mode=True)
        expected = [f"{i:03d}.jpg" for i in range(1, 13)]
        assert sorted(p.name for p in target.iterdir()) == expected
        assert [p.name for p in outputs] == expected
        assert result.organized == 12
        assert (target / "010.jpg").read_bytes() == b"page 10"

    def test_photo_mode_names(self, tmp_path):
        _, files = self._source(tmp_path, 2)
        target, _, _ = self._run(tmp_path, files)
        assert sorted(p.name for p in target.iterdir()) == ["IMG_001.jpg", "IMG_002.jpg"]

    def test_creates_nested_target(self, tmp_path):
        _, files = self._source(tmp_path, 1)
        target = tmp_path / "a" / "b"
        config = OrganizerConfig(_env_file=None)
        run(
            files=files,
            source_dir=tmp_path / "src",
            target_dir=target,
            config=config,
            result=DirectoryResult(source=tmp_path, target=target),
        )
        assert (target / "IMG_001.jpg").exists()

    def test_preserve_dates(self, tmp_path):
        _, files = self._source(tmp_path, 1)
        os.utime(files[0], (1_500_000_000, 1_500_000_000))
        target, _, _ = self._run(tmp_path, files, preserve_dates=True)
        assert int((target / "IMG_001.jpg").stat().st_mtime) == 1_500_000_000

    def test_without_preserve_dates_gets_fresh_time(self, tmp_path):
        _, files = self._source(tmp_path, 1)
        os.utime(files[0], (1_000_000_000, 1_000_000_000))
        target, _, _ = self._run(tmp_path, files)
        assert int((target / "IMG_001.jpg").stat().st_mtime) != 1_000_000_000

    def test_failed_copy_leaves_no_gap(self, tmp_path):
        _, files = self._source(tmp_path, 3)
        files[1].unlink()  # vanished between scan and copy
        target, outputs, result = self._run(tmp_path, files, comic_mode=True)
        assert [p.name for p in outputs] == ["001.jpg", "002.jpg"]
        assert (target / "002.jpg").read_bytes() == b"page 3"
        assert result.organized == 2
        assert result.failed == 1

    def test_sources_untouched(self, tmp_path):
        src, files = self._source(tmp_path, 3)
        before = {p.name: (p.read_bytes(), p.stat().st_mtime) for p in src.iterdir()}
        self._run(tmp_path, files, comic_mode=True)
        after = {p.name: (p.read_bytes(), p.stat().st_mtime) for p in src.iterdir()}
        assert after == before

    def test_dry_run_writes_nothing(self, tmp_path):
        _, files = self._source(tmp_path, 2)
        target, outputs, result = self._run(tmp_path, files, dry_run=True)
        assert not target.exists()
        assert [p.name for p in outputs] == ["IMG_001.jpg", "IMG_002.jpg"]

    def test_unusable_target_is_config_error(self, tmp_path):
        _, files = self._source(tmp_path, 1)
        blocker = tmp_path / "out"
        blocker.write_text("not a directory")
        with pytest.raises(ConfigError):
            self._run(tmp_path, files)

    def test_refuses_to_overwrite_a_source(self, tmp_path):
        src = tmp_path / "src"
        src.mkdir()
        first = src / "a.jpg"
        first.write_bytes(b"A")
        clash = src / "IMG_001.jpg"
        clash.write_bytes(b"ORIGINAL")
        config = OrganizerConfig(_env_file=None)
        result = DirectoryResult(source=src, target=src)
        with pytest.raises(ConfigError, match="overwrite source"):
            run(
                files=[first, clash],
                source_dir=src,
                target_dir=src,
                config=config,
                result=result,
            )
        assert clash.read_bytes() == b"ORIGINAL"

    @patch("psp_photo_organizer.stages.organize.shutil.copy")
    def test_uses_plain_copy_by_default(self, mock_copy, tmp_path):
        _, files = self._source(tmp_path, 1)
        self._run(tmp_path, files)
        mock_copy.assert_called_once()
