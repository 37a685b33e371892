"""Tests for reader configuration (ReaderConfig)."""

import json

import pytest

from tiffsize.config import EOF_SAFETY_MARGIN, IFD_WINDOW_SIZE, ReaderConfig


class TestReaderConfigDefault:
    def test_defaults(self):
        config = ReaderConfig.default()
        assert config.window_size == IFD_WINDOW_SIZE == 1024
        assert config.eof_margin == EOF_SAFETY_MARGIN == 10
        assert config.unknown_byte_order == 'error'

    def test_invalid_window_size(self):
        with pytest.raises(ValueError):
            ReaderConfig(window_size=2)
        with pytest.raises(ValueError):
            ReaderConfig(window_size='1024')

    def test_invalid_eof_margin(self):
        with pytest.raises(ValueError):
            ReaderConfig(eof_margin=-1)

    def test_invalid_policy(self):
        with pytest.raises(ValueError):
            ReaderConfig(unknown_byte_order='big')


class TestReaderConfigFromJSON:
    def test_partial_override(self, tmp_path):
        config_file = tmp_path / 'reader.json'
        config_file.write_text(json.dumps({'window_size': 4096}))
        config = ReaderConfig.from_json(config_file)
        assert config.window_size == 4096
        assert config.eof_margin == 10
        assert config.unknown_byte_order == 'error'

    def test_full_override(self, tmp_path):
        config_file = tmp_path / 'reader.json'
        config_file.write_text(json.dumps({
            'window_size': 256,
            'eof_margin': 0,
            'unknown_byte_order': 'little',
        }))
        config = ReaderConfig.from_json(str(config_file))
        assert config == ReaderConfig(256, 0, 'little')

    def test_empty_object(self, tmp_path):
        config_file = tmp_path / 'reader.json'
        config_file.write_text('{}')
        assert ReaderConfig.from_json(config_file) == ReaderConfig.default()

    def test_unknown_key(self, tmp_path):
        config_file = tmp_path / 'reader.json'
        config_file.write_text(json.dumps({'window': 4096}))
        with pytest.raises(ValueError, match='window'):
            ReaderConfig.from_json(config_file)

    def test_not_an_object(self, tmp_path):
        config_file = tmp_path / 'reader.json'
        config_file.write_text('[1024]')
        with pytest.raises(ValueError):
            ReaderConfig.from_json(config_file)

    def test_invalid_value(self, tmp_path):
        config_file = tmp_path / 'reader.json'
        config_file.write_text(json.dumps({'eof_margin': -5}))
        with pytest.raises(ValueError):
            ReaderConfig.from_json(config_file)

    def test_malformed_json(self, tmp_path):
        config_file = tmp_path / 'reader.json'
        config_file.write_text('{window_size: ')
        with pytest.raises(ValueError):
            ReaderConfig.from_json(config_file)
