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
Prediction scoring.
"""
import typing

import numpy
import pandas
from sklearn import metrics
from statsmodels.stats import proportion

import survival

LEVELS = (0, 1)


class Report(typing.NamedTuple):
    """Validation report of a binary classifier.

    The confusion matrix has the predictions in rows and the reference (true) values in columns.
    """

    confusion: pandas.DataFrame
    accuracy: float
    lower: float
    upper: float
    nir: float
    kappa: float
    sensitivity: float
    specificity: float
    alpha: float

    def __str__(self):
        return '\n'.join(
            (
                'Confusion Matrix (rows: prediction, columns: reference)',
                self.confusion.to_string(),
                f'Accuracy: {self.accuracy:.4f}',
                f'{1 - self.alpha:.0%} CI: ({self.lower:.4f}, {self.upper:.4f})',
                f'No Information Rate: {self.nir:.4f}',
                f'Kappa: {self.kappa:.4f}',
                f'Sensitivity: {self.sensitivity:.4f}',
                f'Specificity: {self.specificity:.4f}',
            )
        )


def ratio(numerator: float, denominator: float) -> float:
    """Safe division returning nan for zero denominator."""
    return numerator / denominator if denominator else float('nan')


def score(true: pandas.Series, pred: pandas.Series, alpha: float = 0.05) -> Report:
    """Score the predictions against the true labels.

    The accuracy confidence interval is the exact (Clopper-Pearson) binomial interval. The class ``1`` (survived)
    is the positive one.

    Args:
        true: True labels.
        pred: Predicted labels.
        alpha: Significance level of the confidence interval.

    Returns:
        Report instance.
    """
    true = numpy.asarray(true, dtype=int)
    pred = numpy.asarray(pred, dtype=int)
    if len(true) != len(pred):
        raise survival.InvalidError(f'Length mismatch: {len(true)} true vs {len(pred)} predicted labels')
    if not len(true):
        raise survival.InvalidError('No labels to score')
    matrix = metrics.confusion_matrix(true, pred, labels=LEVELS)  # rows: true, columns: predicted
    confusion = pandas.DataFrame(matrix.T, index=pandas.Index(LEVELS, name='prediction'), columns=list(LEVELS))
    confusion.columns.name = 'reference'
    correct = int(numpy.trace(matrix))
    lower, upper = proportion.proportion_confint(correct, len(true), alpha=alpha, method='beta')
    (tn, fp), (fn, tp) = matrix
    return Report(
        confusion=confusion,
        accuracy=correct / len(true),
        lower=float(lower),
        upper=float(upper),
        nir=float(matrix.sum(axis=1).max() / len(true)),
        kappa=float(metrics.cohen_kappa_score(true, pred, labels=LEVELS)),
        sensitivity=ratio(tp, tp + fn),
        specificity=ratio(tn, tn + fp),
        alpha=alpha,
    )
