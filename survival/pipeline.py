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
End-to-end survival pipeline.
"""
import logging
import pathlib
import typing

import pandas

import survival
from survival import actor, clean, etl, evaluation, feature, model, split  # pylint: disable=unused-import
from survival.conf import parsed

LOGGER = logging.getLogger(__name__)


class Dataset(typing.NamedTuple):
    """Engineered passenger partitions."""

    train: pandas.DataFrame
    test: pandas.DataFrame
    fitset: pandas.DataFrame
    validset: pandas.DataFrame
    label: str = clean.LABEL

    def select(self, trainset: str) -> pandas.DataFrame:
        """Get the partition a model is configured to train on.

        Args:
            trainset: Partition name (``train`` or ``fitset``).

        Returns:
            Selected partition.
        """
        if trainset not in {'train', 'fitset'}:
            raise survival.InvalidError(f'Unknown trainset: {trainset}')
        return getattr(self, trainset)


def prepare(
    train: typing.Union[str, pathlib.Path],
    test: typing.Union[str, pathlib.Path],
    ratio: float = 0.75,
    seed: typing.Optional[int] = None,
) -> Dataset:
    """Load, clean, engineer and split the passenger data.

    Args:
        train: Path to the labeled train file.
        test: Path to the unlabeled test file.
        ratio: Fraction of the train rows going into the fit-set.
        seed: Random seed of the fit/validation split.

    Returns:
        Dataset instance.
    """
    data = feature.engineer(clean.clean(etl.load(train, test)))
    trainset, testset = split.partition(data, clean.LABEL)
    fitset, validset = split.holdout(trainset, ratio, seed)
    LOGGER.info(
        'Prepared %d train (%d fit, %d validation) and %d test rows',
        len(trainset),
        len(fitset),
        len(validset),
        len(testset),
    )
    return Dataset(trainset, testset, fitset, validset)


def fit(config: parsed.Model, dataset: Dataset) -> actor.Actor:
    """Instantiate and train the configured model.

    Args:
        config: Model config section.
        dataset: Prepared dataset.

    Returns:
        Trained actor.
    """
    instance = actor.Actor.lookup(config.provider)(**config.params)
    if instance.is_stateful():
        features, labels = split.extract(dataset.select(config.trainset), dataset.label)
        LOGGER.debug('Training %s on the %s partition', instance, config.trainset)
        instance.train(features, labels)
    return instance


def evaluate(instance: actor.Actor, dataset: Dataset, alpha: float = 0.05) -> evaluation.Report:
    """Score the model predictions on the validation-set.

    Args:
        instance: Trained actor.
        dataset: Prepared dataset.
        alpha: Significance level of the accuracy confidence interval.

    Returns:
        Validation report.
    """
    features, labels = split.extract(dataset.validset, dataset.label)
    return evaluation.score(labels.astype(int), instance.apply(features), alpha)


def predict(instance: actor.Actor, dataset: Dataset) -> pandas.Series:
    """Predict the test partition.

    Args:
        instance: Trained actor.
        dataset: Prepared dataset.

    Returns:
        Predicted labels indexed by the passenger identifier.
    """
    features, _ = split.extract(dataset.test, dataset.label)
    return instance.apply(features)


def run(
    models: typing.Sequence[parsed.Model],
    train: typing.Union[str, pathlib.Path],
    test: typing.Union[str, pathlib.Path],
    output: typing.Optional[typing.Union[str, pathlib.Path]] = None,
    ratio: float = 0.75,
    seed: typing.Optional[int] = None,
    alpha: float = 0.05,
) -> typing.Mapping[str, evaluation.Report]:
    """Fit, validate and (optionally) write the test predictions of each of the models in sequence.

    Args:
        models: Model configs in the order of execution.
        train: Path to the labeled train file.
        test: Path to the unlabeled test file.
        output: Directory to write the ``<model>.csv`` prediction files to (skipped if None).
        ratio: Fraction of the train rows going into the fit-set.
        seed: Random seed of the fit/validation split.
        alpha: Significance level of the accuracy confidence interval.

    Returns:
        Validation reports keyed by the model reference.
    """
    dataset = prepare(train, test, ratio, seed)
    reports = {}
    for config in models:
        instance = fit(config, dataset)
        reports[config.reference] = report = evaluate(instance, dataset, alpha)
        LOGGER.info(
            'Model %s validation accuracy %.4f (%.4f, %.4f)', config.reference, report.accuracy, report.lower, report.upper
        )
        if output is not None:
            etl.dump(predict(instance, dataset), pathlib.Path(output) / f'{config.reference}.csv')
    return reports
