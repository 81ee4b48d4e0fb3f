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
Passenger table cleaning.
"""
import logging
import typing

import pandas
from sklearn import linear_model

import survival
from survival import actor

LOGGER = logging.getLogger(__name__)

COLUMNS = {
    'PassengerId': 'passenger',
    'Survived': 'survived',
    'Pclass': 'travel_class',
    'Name': 'name',
    'Sex': 'sex',
    'Age': 'age',
    'SibSp': 'siblings',
    'Parch': 'other_family',
    'Ticket': 'ticket',
    'Fare': 'fare',
    'Cabin': 'cabin',
    'Embarked': 'port',
}
INDEX = 'passenger'
LABEL = 'survived'
CATEGORICAL = ('survived', 'travel_class', 'sex', 'port')
TEXT = ('name', 'ticket', 'cabin')


def rename(data: pandas.DataFrame) -> pandas.DataFrame:
    """Map the raw header names to the canonical ones and turn the identifier into the index.

    Args:
        data: Raw passenger table.

    Returns:
        Renamed table indexed by the passenger identifier.
    """
    if missing := set(COLUMNS).difference(data.columns):
        raise survival.InvalidError(f'Missing columns: {", ".join(sorted(missing))}')
    return data.rename(columns=COLUMNS).set_index(INDEX)


def coerce(data: pandas.DataFrame) -> pandas.DataFrame:
    """Set the categorical and free-text column types.

    Args:
        data: Renamed passenger table.

    Returns:
        Table with coerced column types.
    """
    data = data.copy()
    for column in CATEGORICAL:
        data[column] = data[column].astype('category')
    for column in TEXT:
        data[column] = data[column].astype(object)
    return data


class AgeImputer(actor.Actor[pandas.DataFrame, pandas.Series, pandas.Series]):
    """Ordinary least squares regression of the age on the family counts and the sex."""

    PREDICTORS = ('siblings', 'other_family')

    def __init__(self):
        self._model: typing.Optional[linear_model.LinearRegression] = None

    @classmethod
    def design(cls, features: pandas.DataFrame) -> pandas.DataFrame:
        """Build the regression design matrix.

        Args:
            features: Passenger table.

        Returns:
            Numeric predictor matrix.
        """
        matrix = features[list(cls.PREDICTORS)].astype(float)
        matrix['male'] = (features['sex'] == 'male').astype(float)
        return matrix

    def train(self, features: pandas.DataFrame, labels: pandas.Series, /) -> None:
        matrix = self.design(features)
        self._model = linear_model.LinearRegression().fit(matrix, labels.astype(float))
        LOGGER.debug(
            'Age regression intercept %.3f coefficients %s',
            self._model.intercept_,
            dict(zip(matrix.columns, self._model.coef_.round(3))),
        )

    def apply(self, features: pandas.DataFrame) -> pandas.Series:
        if self._model is None:
            raise survival.FailedError('Age imputer not trained')
        return pandas.Series(self._model.predict(self.design(features)), index=features.index, name='age')


def impute(data: pandas.DataFrame) -> pandas.DataFrame:
    """Fill the missing values using the per-column policies.

    * cabin: empty string
    * fare: mean over the whole table
    * port: most frequent value
    * age: regression prediction based on the family counts and sex

    Args:
        data: Coerced passenger table.

    Returns:
        Table with no missing values except for the label.
    """
    data = data.copy()
    data['cabin'] = data['cabin'].fillna('')
    fare = data['fare'].mean()
    LOGGER.debug('Filling %d missing fares with %.3f', data['fare'].isna().sum(), fare)
    data['fare'] = data['fare'].fillna(fare)
    port = data['port'].mode().iloc[0]
    LOGGER.debug('Filling %d missing ports with %s', data['port'].isna().sum(), port)
    data['port'] = data['port'].fillna(port)

    unknown = data['age'].isna()
    if unknown.any():
        imputer = AgeImputer()
        imputer.train(data.loc[~unknown], data.loc[~unknown, 'age'])
        LOGGER.debug('Predicting %d missing ages', unknown.sum())
        data.loc[unknown, 'age'] = imputer.apply(data.loc[unknown])
    return data


def clean(data: pandas.DataFrame) -> pandas.DataFrame:
    """Complete cleaning procedure.

    Args:
        data: Raw combined passenger table.

    Returns:
        Renamed, coerced and imputed table.

    Raises:
        survival.FailedError: If any column other than the label still contains missing values.
    """
    data = impute(coerce(rename(data)))
    incomplete = data.drop(columns=LABEL).isna().any()
    if incomplete.any():
        raise survival.FailedError(f'Missing values after imputation: {", ".join(incomplete[incomplete].index)}')
    return data
