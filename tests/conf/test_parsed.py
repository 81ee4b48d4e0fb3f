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
Parsed config sections unit tests.
"""
# pylint: disable=no-self-use
import pytest

import survival
from survival.conf import parsed


class TestModel:
    """Model section unit tests."""

    def test_default(self):
        """Test the default references keep the configured order."""
        models = parsed.Model.default
        assert [m.reference for m in models] == ['rule', 'tree', 'forest']
        assert [m.trainset for m in models] == ['train', 'train', 'fitset']

    def test_params(self):
        """Test the generic params get flattened."""
        [forest] = parsed.Model.resolve('forest')
        assert forest.provider == 'forest'
        assert forest.params['n_estimators'] == 10
        assert forest.params['folds'] == 3
        assert 'trainset' not in forest.params and 'provider' not in forest.params

    def test_explicit(self):
        """Test an explicit subset of references."""
        assert [m.reference for m in parsed.Model.resolve(['tree', 'rule'])] == ['tree', 'rule']

    def test_missing(self):
        """Test an unknown reference."""
        with pytest.raises(survival.MissingError, match=r'\[MODEL.foo\]'):
            parsed.Model.resolve('foo')

    def test_equality(self):
        """Test the sections are identified by their reference."""
        assert parsed.Model('tree') == parsed.Model('tree')
        assert hash(parsed.Model('tree')) == hash(parsed.Model('tree'))
        assert parsed.Model('tree') != parsed.Model('rule')
