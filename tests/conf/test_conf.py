# Licensed to the Apache Software Foundation (ASF) under one
# or more contributor license agreements.  See the NOTICE file
# distributed with this work for additional information
# regarding copyright ownership.  The ASF licenses this file
# to you under the Apache License, Version 2.0 (the
# "License"); you may not use this file except in compliance
# with the License.  You may obtain a copy of the License at
#
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing,
# software distributed under the License is distributed on an
# "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY
# KIND, either express or implied.  See the License for the
# specific language governing permissions and limitations
# under the License.

"""
Survival config unit tests.
"""
# pylint: disable=protected-access,no-self-use
import pathlib
import types
import typing

import pytest

import survival
from survival import conf


def test_exists(cfg_file: pathlib.Path):
    """Test the config file exists."""
    assert cfg_file.is_file()


def test_src(cfg_file: pathlib.Path):
    """Test the test config is among the sources."""
    assert cfg_file in conf.PARSER.sources
    assert pathlib.Path(conf.__file__).parent / conf.APPCFG in conf.PARSER.sources


def test_defaults():
    """Test the packaged defaults."""
    assert conf.PARSER[conf.SECTION_SPLIT][conf.OPT_RATIO] == 0.75
    assert set(conf.PARSER[conf.SECTION_SPLIT]) == {conf.OPT_RATIO, conf.OPT_SEED}
    assert conf.PARSER[conf.SECTION_MODEL][conf.OPT_DEFAULT] == ['rule', 'tree', 'forest']
    assert conf.PARSER[conf.SECTION_LOGGING][conf.OPT_CONFIG] == 'logging.ini'


class TestParser:
    """Parser unit tests."""

    @staticmethod
    @pytest.fixture(scope='session')
    def defaults() -> typing.Mapping[str, typing.Any]:
        """Default values fixtures."""
        return types.MappingProxyType({'foo': 'bar', 'baz': {'scalar': 1, 'seq': [10, 3, 'asd']}})

    @staticmethod
    @pytest.fixture(scope='function')
    def parser(defaults: typing.Mapping[str, typing.Any]) -> conf.Parser:
        """Parser fixture."""
        return conf.Parser(defaults)

    def test_update(self, parser: conf.Parser):
        """Parser update tests."""
        parser.update(baz={'another': 2})
        assert parser['baz']['scalar'] == 1
        parser.update({'baz': {'scalar': 3}})
        assert parser['baz']['scalar'] == 3
        assert parser['baz']['another'] == 2
        parser.update({'baz': {'seq': [3, 'qwe']}})
        assert parser['baz']['seq'] == [3, 'qwe']

    def test_subscribe(self, parser: conf.Parser):
        """Test the update notifications."""
        calls = []
        parser.subscribe(lambda: calls.append(parser['foo']))
        parser.update(foo='qux')
        assert calls == ['qux']

    def test_read(self, parser: conf.Parser, cfg_file: pathlib.Path, tmp_path: pathlib.Path):
        """Test parser file reading."""
        parser.read(cfg_file)
        assert cfg_file in parser.sources
        assert parser['foobar'] == 'baz'
        parser.read(tmp_path / 'missing.toml')
        assert tmp_path / 'missing.toml' not in parser.sources

    def test_invalid(self, parser: conf.Parser, tmp_path: pathlib.Path):
        """Test invalid config is a hard error."""
        path = tmp_path / 'invalid.toml'
        path.write_text('foo = ')
        with pytest.raises(survival.InvalidError, match='Invalid config file'):
            parser.read(path)
