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
Dataset partitioning.
"""
import logging
import typing

import numpy
import pandas
from sklearn import model_selection

import survival

LOGGER = logging.getLogger(__name__)


def partition(data: pandas.DataFrame, label: str = 'survived') -> tuple[pandas.DataFrame, pandas.DataFrame]:
    """Separate the labeled (train) rows from the unlabeled (test) ones.

    Args:
        data: Combined passenger table.
        label: Name of the target column.

    Returns:
        Train and test tables.
    """
    known = data[label].notna()
    LOGGER.debug('Partitioning into %d train and %d test rows', known.sum(), (~known).sum())
    return data.loc[known].copy(), data.loc[~known].copy()


def indices(size: int, ratio: float, seed: typing.Optional[int]) -> numpy.ndarray:
    """Seeded sample of positions drawn without replacement.

    Args:
        size: Number of rows to draw from.
        ratio: Fraction of the rows to draw (rounded down).
        seed: Random seed.

    Returns:
        Sorted array of the drawn positions.
    """
    if not 0 < ratio < 1:
        raise survival.InvalidError(f'Split ratio must be within (0, 1): {ratio}')
    count = int(ratio * size)
    if not 0 < count < size:
        raise survival.InvalidError(f'Split of {size} rows by {ratio} leaves an empty partition')
    splitter = model_selection.ShuffleSplit(n_splits=1, train_size=count, random_state=seed)
    drawn, _ = next(splitter.split(numpy.zeros(size)))
    return numpy.sort(drawn)


def holdout(
    train: pandas.DataFrame, ratio: float = 0.75, seed: typing.Optional[int] = None
) -> tuple[pandas.DataFrame, pandas.DataFrame]:
    """Split the labeled rows into the fit-set and the validation-set.

    Args:
        train: Labeled passenger table.
        ratio: Fraction of rows going into the fit-set.
        seed: Random seed making the split reproducible.

    Returns:
        Fit-set and validation-set tables, both in the original row order.
    """
    selected = numpy.zeros(len(train), dtype=bool)
    selected[indices(len(train), ratio, seed)] = True
    LOGGER.debug('Holding out %d of %d rows for validation', (~selected).sum(), len(train))
    return train.iloc[selected].copy(), train.iloc[~selected].copy()


def extract(frame: pandas.DataFrame, label: str = 'survived') -> tuple[pandas.DataFrame, pandas.Series]:
    """Detach the label column from the features.

    Args:
        frame: Table including the label column.
        label: Name of the target column.

    Returns:
        Features without the label and the label series.
    """
    return frame.drop(columns=label), frame[label]
