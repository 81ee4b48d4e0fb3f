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
Passenger data loading and prediction dumping.
"""
import logging
import pathlib
import typing

import pandas

import survival

LOGGER = logging.getLogger(__name__)

IDENTIFIER = 'PassengerId'
TARGET = 'Survived'

#: Only the empty string counts as missing, literal values like "NA" are kept as they are.
CSV_OPTIONS = {'header': 0, 'keep_default_na': False, 'na_values': ['']}


def read(path: typing.Union[str, pathlib.Path], **kwargs) -> pandas.DataFrame:
    """Parse a single passenger CSV file.

    Args:
        path: Location of the CSV file.
        kwargs: Optional keyword arguments to be passed to :func:`pandas:pandas.read_csv`.

    Returns:
        Parsed dataframe.

    Raises:
        survival.MissingError: If the file does not exist.
    """
    path = pathlib.Path(path)
    if not path.is_file():
        raise survival.MissingError(f'Input file not found: {path}')
    LOGGER.debug('Reading %s', path)
    return pandas.read_csv(path, **(CSV_OPTIONS | kwargs))


def load(train: typing.Union[str, pathlib.Path], test: typing.Union[str, pathlib.Path]) -> pandas.DataFrame:
    """Load the train and test passenger files into one combined table.

    The test rows get the target column added with all values missing. The train rows come first followed by the test
    rows, each in the original file order.

    Args:
        train: Path to the labeled train file.
        test: Path to the unlabeled test file.

    Returns:
        Combined dataframe with a fresh range index.
    """
    trainset = read(train)
    testset = read(test)
    if TARGET not in trainset:
        raise survival.InvalidError(f'Train file {train} is missing the {TARGET} column')
    testset[TARGET] = float('nan')
    data = pandas.concat((trainset, testset[trainset.columns]), ignore_index=True)
    if data[IDENTIFIER].duplicated().any():
        duplicates = data.loc[data[IDENTIFIER].duplicated(), IDENTIFIER].tolist()
        raise survival.InvalidError(f'Duplicate passenger identifiers: {duplicates}')
    LOGGER.info('Loaded %d train and %d test passengers', len(trainset), len(testset))
    return data


def dump(
    predictions: pandas.Series,
    path: typing.Union[str, pathlib.Path],
    index_label: str = IDENTIFIER,
    label: str = TARGET,
) -> pathlib.Path:
    """Write the predictions indexed by the passenger identifier as a two-column CSV file.

    Args:
        predictions: Predicted 0/1 labels indexed by the passenger identifier.
        path: Target location.
        index_label: Header of the identifier column.
        label: Header of the prediction column.

    Returns:
        The written path.
    """
    path = pathlib.Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    predictions.astype(int).rename(label).rename_axis(index_label).reset_index().to_csv(path, index=False)
    LOGGER.info('Written %d predictions to %s', len(predictions), path)
    return path
