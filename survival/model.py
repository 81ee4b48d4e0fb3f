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
Survival classifiers.
"""
import abc
import logging
import typing

import pandas
from sklearn import ensemble, model_selection, tree

import survival
from survival import actor

LOGGER = logging.getLogger(__name__)


def encode(features: pandas.DataFrame) -> pandas.DataFrame:
    """One-hot encode the categorical columns into a numeric predictor matrix.

    The dummy columns are generated for all the declared categories so frames sliced from the same table always
    produce the same columns.

    Args:
        features: Engineered features.

    Returns:
        Numeric matrix.

    Raises:
        survival.FailedError: If the features contain missing values.
    """
    if features.isna().any().any():
        raise survival.FailedError(f'Missing values in features: {", ".join(features.columns[features.isna().any()])}')
    return pandas.get_dummies(features, dtype=float).astype(float)


class Rule(actor.Actor[pandas.DataFrame, None, pandas.Series], alias='rule'):
    """Hand-written rule predicting survival of the first class women."""

    def apply(self, features: pandas.DataFrame) -> pandas.Series:
        survived = (features['sex'] == 'female') & (features['travel_class'] == 1)
        return survived.astype(int).rename('survived')


class Estimator(actor.Actor[pandas.DataFrame, pandas.Series, pandas.Series], metaclass=abc.ABCMeta):
    """Base class for actors wrapping a scikit-learn classifier."""

    def __init__(self, **params: typing.Any):
        self._params: dict[str, typing.Any] = dict(params)
        self._model = None
        self._columns: typing.Optional[pandas.Index] = None

    @abc.abstractmethod
    def build(self):
        """Create a vanilla classifier instance according to the current hyper-parameters.

        Returns:
            Unfitted scikit-learn classifier.
        """

    @property
    def model(self):
        """The fitted classifier."""
        if self._model is None:
            raise survival.FailedError(f'{self} not trained')
        return self._model

    def train(self, features: pandas.DataFrame, labels: pandas.Series, /) -> None:
        matrix = encode(features)
        LOGGER.debug('Training %s on %d rows x %d columns', self, *matrix.shape)
        self._columns = matrix.columns
        self._model = self.build().fit(matrix, labels.astype(int))

    def apply(self, features: pandas.DataFrame) -> pandas.Series:
        model = self.model
        matrix = encode(features).reindex(columns=self._columns, fill_value=0.0)
        return pandas.Series(model.predict(matrix), index=features.index, name='survived').astype(int)

    def get_params(self) -> typing.Mapping[str, typing.Any]:
        return dict(self._params)

    def set_params(self, **params: typing.Any) -> None:
        self._params.update(params)


class Tree(Estimator, alias='tree'):
    """Single decision tree with the library default stopping criteria."""

    def build(self) -> tree.DecisionTreeClassifier:
        return tree.DecisionTreeClassifier(**self._params)


class Forest(Estimator, alias='forest'):
    """Random forest with hyper-parameters selected by a stratified k-fold cross-validated grid search.

    Args:
        folds: Number of cross-validation folds.
        grid: Mapping of forest hyper-parameters to the candidate values to search.
        random_state: Seed for both the folding and the forest.
        params: Fixed forest hyper-parameters.
    """

    def __init__(
        self,
        folds: int = 5,
        grid: typing.Optional[typing.Mapping[str, typing.Sequence[typing.Any]]] = None,
        random_state: typing.Optional[int] = None,
        **params: typing.Any,
    ):
        super().__init__(folds=folds, grid=dict(grid or {}), random_state=random_state, **params)

    def build(self) -> model_selection.GridSearchCV:
        params = dict(self._params)
        folds = params.pop('folds')
        grid = {k: list(v) for k, v in params.pop('grid').items()}
        random_state = params.pop('random_state')
        return model_selection.GridSearchCV(
            ensemble.RandomForestClassifier(random_state=random_state, **params),
            param_grid=grid,
            cv=model_selection.StratifiedKFold(n_splits=folds, shuffle=True, random_state=random_state),
            scoring='accuracy',
        )

    def train(self, features: pandas.DataFrame, labels: pandas.Series, /) -> None:
        super().train(features, labels)
        LOGGER.info('Forest selected %s (cv accuracy %.4f)', self._model.best_params_, self._model.best_score_)
