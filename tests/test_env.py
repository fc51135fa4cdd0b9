"""Tests for xpcodec.core.env — .env loading and codec settings."""

import logging
import os
from pathlib import Path

import pytest
from xpcodec.core import env
from xpcodec.core.env import CodecSettings, _find_dotenv, _parse_dotenv, get_settings, load_env, settings_from_environ


class TestParseDotenv:
    def test_simple_key_value(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('XPCODEC_TRANSPORT=zlib\n')
        assert _parse_dotenv(f) == {'XPCODEC_TRANSPORT': 'zlib'}

    def test_quoted_values(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('A="two words"\nB=\'single\'\n')
        assert _parse_dotenv(f) == {'A': 'two words', 'B': 'single'}

    def test_comments_and_blanks_ignored(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('# comment\n\nFOO=bar\nNOEQUALS\n')
        assert _parse_dotenv(f) == {'FOO': 'bar'}

    def test_export_prefix(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('export XPCODEC_COMPRESSION_LEVEL=3\n')
        assert _parse_dotenv(f) == {'XPCODEC_COMPRESSION_LEVEL': '3'}


class TestFindDotenv:
    def test_finds_in_parent(self, tmp_path: Path) -> None:
        subdir = tmp_path / 'sub'
        subdir.mkdir()
        dotenv = tmp_path / '.env'
        dotenv.write_text('X=1\n')
        assert _find_dotenv(subdir) == dotenv

    def test_stops_at_git_dir(self, tmp_path: Path) -> None:
        repo = tmp_path / 'repo'
        (repo / '.git').mkdir(parents=True)
        (repo / 'src').mkdir()
        (tmp_path / '.env').write_text('X=1\n')
        assert _find_dotenv(repo / 'src') is None

    def test_stops_at_git_file(self, tmp_path: Path) -> None:
        repo = tmp_path / 'repo'
        (repo / 'src').mkdir(parents=True)
        (repo / '.git').write_text('gitdir: ../somewhere\n')
        (tmp_path / '.env').write_text('X=1\n')
        assert _find_dotenv(repo / 'src') is None


class TestLoadEnv:
    def test_sets_missing_vars(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv('TEST_XPCODEC_KEY', raising=False)
        (tmp_path / '.env').write_text('TEST_XPCODEC_KEY=value\n')
        monkeypatch.chdir(tmp_path)
        try:
            assert load_env() == tmp_path / '.env'
            assert os.environ.get('TEST_XPCODEC_KEY') == 'value'
        finally:
            os.environ.pop('TEST_XPCODEC_KEY', None)

    def test_does_not_overwrite_existing(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('TEST_XPCODEC_KEY2', 'original')
        (tmp_path / '.env').write_text('TEST_XPCODEC_KEY2=fromfile\n')
        monkeypatch.chdir(tmp_path)
        load_env()
        assert os.environ.get('TEST_XPCODEC_KEY2') == 'original'

    def test_missing_explicit_file(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger='xpcodec.core.env'):
            assert load_env(env_file=str(tmp_path / 'nope.env')) is None
        assert 'not found' in caplog.text

    def test_returns_none_when_no_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / '.git').mkdir()
        monkeypatch.chdir(tmp_path)
        assert load_env() is None


class TestSettings:
    def test_defaults(self) -> None:
        assert settings_from_environ({}) == CodecSettings(transport='gzip', compression_level=9)

    def test_values(self) -> None:
        s = settings_from_environ({'XPCODEC_TRANSPORT': ' ZLIB ', 'XPCODEC_COMPRESSION_LEVEL': '4'})
        assert s == CodecSettings(transport='zlib', compression_level=4)

    def test_bad_level_falls_back(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger='xpcodec.core.env'):
            s = settings_from_environ({'XPCODEC_COMPRESSION_LEVEL': 'max'})
        assert s.compression_level == 9
        assert 'not an integer' in caplog.text

    def test_level_clamped(self) -> None:
        assert settings_from_environ({'XPCODEC_COMPRESSION_LEVEL': '12'}).compression_level == 9
        assert settings_from_environ({'XPCODEC_COMPRESSION_LEVEL': '-3'}).compression_level == 0

    def test_get_settings_reads_explicit_env_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv('XPCODEC_TRANSPORT', raising=False)
        monkeypatch.delenv('XPCODEC_COMPRESSION_LEVEL', raising=False)
        monkeypatch.setattr(env, '_cached', None)
        dotenv = tmp_path / 'codec.env'
        dotenv.write_text('XPCODEC_TRANSPORT=raw\nXPCODEC_COMPRESSION_LEVEL=2\n')
        try:
            settings = get_settings(env_file=str(dotenv))
            assert settings == CodecSettings(transport='raw', compression_level=2)
            assert get_settings() is settings
        finally:
            os.environ.pop('XPCODEC_TRANSPORT', None)
            os.environ.pop('XPCODEC_COMPRESSION_LEVEL', None)

    def test_os_environment_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('XPCODEC_TRANSPORT', 'zlib')
        monkeypatch.setattr(env, '_cached', None)
        dotenv = tmp_path / 'codec.env'
        dotenv.write_text('XPCODEC_TRANSPORT=raw\n')
        assert get_settings(env_file=str(dotenv)).transport == 'zlib'
