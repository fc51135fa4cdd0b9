"""Tests for xpcodec.registry and the transports it discovers."""

import pytest
from xpcodec import registry
from xpcodec.core.errors import CompressionError
from xpcodec.core.transport import Transport


class TestDiscover:
    def test_finds_builtin_transports(self):
        assert {'gzip', 'zlib', 'raw'} <= set(registry.discover())

    def test_all_transports_is_registry(self):
        assert registry.all_transports() is registry.discover()

    def test_get(self):
        t = registry.get('gzip')
        assert isinstance(t, Transport)
        assert t.name == 'gzip'

    def test_unknown_lists_available(self):
        with pytest.raises(KeyError, match='Available: gzip, raw, zlib'):
            registry.get('brotli')


class TestTransports:
    @pytest.mark.parametrize('name', ['gzip', 'zlib', 'raw'])
    def test_round_trip(self, name: str):
        t = registry.get(name)
        data = bytes(range(256)) * 4
        assert t.decompress(t.compress(data, 6)) == data

    def test_gzip_reads_zlib(self):
        data = b'rexpaint' * 10
        assert registry.get('gzip').decompress(registry.get('zlib').compress(data, 9)) == data

    def test_gzip_corrupt(self):
        with pytest.raises(CompressionError):
            registry.get('gzip').decompress(b'\x1f\x8b\x08garbage')


class TestTransportObject:
    def test_decorators_register(self):
        t = Transport(name='upper', help='test')

        @t.compressor
        def compress(data, level):
            return data.upper()

        @t.decompressor
        def decompress(data):
            return data.lower()

        assert t.compress(b'abc') == b'ABC'
        assert t.decompress(b'ABC') == b'abc'
        assert compress(b'x', 1) == b'X'

    def test_missing_functions(self):
        t = Transport(name='empty')
        with pytest.raises(CompressionError):
            t.compress(b'')
        with pytest.raises(CompressionError):
            t.decompress(b'')
