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
Feature engineering.
"""
import logging
import re

import pandas

LOGGER = logging.getLogger(__name__)

#: Age band name with its [lower, upper) bounds.
BANDS = {
    'child': (float('-inf'), 15),
    'adolescent': (15, 30),
    'adult': (30, 50),
    'senior': (50, float('inf')),
}
DROPPED = ('name', 'cabin', 'ticket', 'siblings', 'other_family')
SCALED = ('fare', 'age')


def family_size(data: pandas.DataFrame) -> pandas.Series:
    """The passenger together with the siblings/spouses and parents/children."""
    return data['siblings'] + data['other_family'] + 1


def age_bands(age: pandas.Series) -> pandas.DataFrame:
    """Boolean flags of the age bands evaluated row by row.

    Args:
        age: Imputed age column.

    Returns:
        Frame with one boolean column per band.
    """
    def within(lower: float, upper: float) -> pandas.Series:
        """Flag of the ages falling into the [lower, upper) interval."""
        return age.map(lambda a: lower <= a < upper).astype(bool)

    return pandas.DataFrame({b: within(*r) for b, r in BANDS.items()}, index=age.index)


def get_honorific(name: str) -> str:
    """Extract the title following the surname.

    >>> get_honorific('Braund, Mr. Owen Harris')
    'Mr'
    """
    tokens = re.split(r'[,.]', name)
    return tokens[1].lstrip() if len(tokens) > 1 else ''


def cabin_count(cabin: str) -> int:
    """Number of cabins listed in the designation."""
    return len(cabin.split())


def cabin_letter(cabin: str) -> str:
    """Deck letter of the (first) cabin."""
    return cabin[:1]


def standardize(column: pandas.Series) -> pandas.Series:
    """Center by the mean and scale by the sample standard deviation."""
    return (column - column.mean()) / column.std(ddof=1)


def engineer(data: pandas.DataFrame) -> pandas.DataFrame:
    """Derive all the features and drop the raw columns they were derived from.

    Args:
        data: Cleaned passenger table.

    Returns:
        Table of engineered features.
    """
    data = data.copy()
    data['family_size'] = family_size(data)
    data = data.join(age_bands(data['age']))
    data['honorific'] = data['name'].map(get_honorific).astype('category')
    data['cabin_count'] = data['cabin'].map(cabin_count)
    data['cabin_letter'] = data['cabin'].map(cabin_letter).astype('category')
    for column in SCALED:
        data[column] = standardize(data[column])
    LOGGER.debug('Honorifics: %s', ', '.join(data['honorific'].cat.categories))
    return data.drop(columns=list(DROPPED))
