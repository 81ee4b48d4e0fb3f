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
Global survival unit tests fixtures.
"""
import logging
import pathlib
import typing

import numpy
import pandas
import pytest

from survival import clean, conf, etl, feature, pipeline

TITLES = {'male': ('Mr', 'Master', 'Dr', 'Rev'), 'female': ('Mrs', 'Miss', 'Ms')}
CABINS = ('', '', '', 'C85', 'C85 C87', 'B42', 'E12 E14 E16')
PORTS = ('S', 'S', 'S', 'C', 'Q')


def passengers(start: int, count: int, labeled: bool, rng: numpy.random.Generator) -> pandas.DataFrame:
    """Generate a synthetic raw passenger table resembling the Kaggle files.

    Every 7th passenger (starting at offset 3) has unknown age, the one at offset 5 has unknown fare and the one at
    offset 9 has unknown port. The first unlabeled passenger is a first class woman.
    """
    rows = []
    for offset, pid in enumerate(range(start, start + count)):
        sex = str(rng.choice(('male', 'female')))
        if not labeled and offset == 0:
            sex = 'female'
        row = {'PassengerId': pid}
        if labeled:
            row['Survived'] = int(sex == 'female' or rng.random() < 0.2)
        row.update(
            {
                'Pclass': int(rng.integers(1, 4)) if labeled or offset else 1,
                'Name': f'Surname{pid}, {rng.choice(TITLES[sex])}. Given Name',
                'Sex': sex,
                'Age': '' if offset % 7 == 3 else round(float(rng.uniform(0.5, 75)), 1),
                'SibSp': int(rng.integers(0, 4)),
                'Parch': int(rng.integers(0, 3)),
                'Ticket': f'A/5 {pid}',
                'Fare': '' if offset == 5 else round(float(rng.uniform(5, 200)), 2),
                'Cabin': str(rng.choice(CABINS)),
                'Embarked': '' if offset == 9 else str(rng.choice(PORTS)),
            }
        )
        rows.append(row)
    return pandas.DataFrame(rows)


@pytest.fixture(scope='session', autouse=True)
def cfg_file() -> pathlib.Path:
    """Fixture for the test config file (merged into the global config for the whole session)."""
    path = pathlib.Path(__file__).parent / conf.APPCFG
    conf.PARSER.read(path)
    return path


@pytest.fixture(autouse=True)
def logging_reset() -> typing.Iterator[None]:
    """Restore the root logger handlers and level potentially reconfigured by the test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(scope='session')
def raw_train() -> pandas.DataFrame:
    """Raw train set fixture."""
    return passengers(1, 80, True, numpy.random.default_rng(42))


@pytest.fixture(scope='session')
def raw_test() -> pandas.DataFrame:
    """Raw test set fixture."""
    return passengers(81, 20, False, numpy.random.default_rng(24))


@pytest.fixture(scope='session')
def trainset_csv(tmp_path_factory: pytest.TempPathFactory, raw_train: pandas.DataFrame) -> pathlib.Path:
    """Train CSV file fixture."""
    path = tmp_path_factory.mktemp('data') / 'train.csv'
    raw_train.to_csv(path, index=False)
    return path


@pytest.fixture(scope='session')
def testset_csv(tmp_path_factory: pytest.TempPathFactory, raw_test: pandas.DataFrame) -> pathlib.Path:
    """Test CSV file fixture."""
    path = tmp_path_factory.mktemp('data') / 'test.csv'
    raw_test.to_csv(path, index=False)
    return path


@pytest.fixture(scope='session')
def loaded(trainset_csv: pathlib.Path, testset_csv: pathlib.Path) -> pandas.DataFrame:
    """Combined raw table fixture."""
    return etl.load(trainset_csv, testset_csv)


@pytest.fixture(scope='session')
def cleaned(loaded: pandas.DataFrame) -> pandas.DataFrame:
    """Cleaned table fixture."""
    return clean.clean(loaded)


@pytest.fixture(scope='session')
def engineered(cleaned: pandas.DataFrame) -> pandas.DataFrame:
    """Engineered table fixture."""
    return feature.engineer(cleaned)


@pytest.fixture(scope='session')
def dataset(trainset_csv: pathlib.Path, testset_csv: pathlib.Path) -> pipeline.Dataset:
    """Prepared dataset fixture."""
    return pipeline.prepare(trainset_csv, testset_csv, ratio=0.75, seed=42)
