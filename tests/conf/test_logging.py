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
Logging setup unit tests.
"""
import logging
import pathlib

import pytest

from survival import conf
from survival.conf import logging as logconf


def write(path: pathlib.Path, level: str) -> None:
    """Write a minimal logging config with the given root level."""
    (path / 'logging.ini').write_text(
        '[loggers]\nkeys = root, survival\n'
        '[handlers]\nkeys = null\n'
        '[formatters]\nkeys =\n'
        f'[logger_root]\nlevel = {level}\nhandlers = null\n'
        '[logger_survival]\nlevel = WARNING\nhandlers = null\nqualname = survival\n'
        '[handler_null]\nclass = NullHandler\nargs = ()\n'
    )


def test_setup(tmp_path: pathlib.Path):
    """Test the config file gets picked up and the explicit level applied."""
    write(tmp_path, 'INFO')
    root = logging.getLogger()
    original = root.level
    try:
        logconf.setup(tmp_path, level='debug')
        assert root.level == logging.DEBUG
        assert logging.getLogger('survival').level == logging.WARNING
    finally:
        root.setLevel(original)
        logging.getLogger('survival').setLevel(logging.NOTSET)


def test_reload(tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch):
    """Test the logging config gets reapplied upon the main config update."""
    write(tmp_path, 'ERROR')
    monkeypatch.setattr(conf, 'PATH', (tmp_path,))
    try:
        conf.PARSER.update()
        assert logging.getLogger().level == logging.ERROR
    finally:
        logging.getLogger('survival').setLevel(logging.NOTSET)
