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
Survival command line interface.
"""
import sys
import typing

import click

import survival
from survival import conf, evaluation, pipeline
from survival.conf import logging as logconf
from survival.conf import parsed


def _models(names: typing.Sequence[str]) -> typing.Sequence[parsed.Model]:
    """Resolve the model configs.

    Args:
        names: Explicit model references (the configured default if empty).

    Returns:
        Model config sections.
    """
    return parsed.Model.resolve(list(names) or None)


def _option(section: str, option: str, value: typing.Any = None) -> typing.Any:
    """Explicit value or the configured one.

    Args:
        section: Config section name.
        option: Config option name.
        value: Explicit value taking precedence.

    Returns:
        Resolved value.
    """
    if value is not None:
        return value
    try:
        return conf.PARSER[section][option]
    except KeyError as err:
        raise survival.MissingError(f'Missing config option [{section}].{option}') from err


@click.group(name='survival')
@click.option('--config', '-C', type=click.Path(exists=True, dir_okay=False), help='Additional config file.')
@click.option(
    '--loglevel',
    '-L',
    type=click.Choice(['debug', 'info', 'warning', 'error'], case_sensitive=False),
    help='Global loglevel to use.',
)
def group(config: typing.Optional[str], loglevel: typing.Optional[str]):
    """Titanic passenger survival prediction."""
    if config:
        conf.PARSER.read(config)
    logconf.setup(level=loglevel)


def _run(
    train: typing.Optional[str],
    test: typing.Optional[str],
    output: typing.Optional[str],
    model: typing.Sequence[str],
) -> typing.Mapping[str, evaluation.Report]:
    """Common helper for the run/eval commands."""
    return pipeline.run(
        _models(model),
        _option(conf.SECTION_DATA, conf.OPT_TRAIN, train),
        _option(conf.SECTION_DATA, conf.OPT_TEST, test),
        output,
        ratio=_option(conf.SECTION_SPLIT, conf.OPT_RATIO),
        seed=_option(conf.SECTION_SPLIT, conf.OPT_SEED),
        alpha=_option(conf.SECTION_EVALUATION, conf.OPT_ALPHA),
    )


def _print(reports: typing.Mapping[str, evaluation.Report]) -> None:
    for name, report in reports.items():
        click.echo(f'== {name} ==')
        click.echo(str(report))
        click.echo()


@group.command()
@click.option('--train', type=click.Path(), help='Labeled train CSV file.')
@click.option('--test', type=click.Path(), help='Unlabeled test CSV file.')
@click.option('--output', '-O', type=click.Path(file_okay=False), help='Directory for the prediction files.')
@click.option('--model', '-M', multiple=True, help='Model reference(s) to run (default all configured).')
def run(
    train: typing.Optional[str],
    test: typing.Optional[str],
    output: typing.Optional[str],
    model: typing.Sequence[str],
) -> None:
    """Fit, validate and predict with each of the models writing the prediction files."""
    output = _option(conf.SECTION_DATA, conf.OPT_OUTPUT, output)
    _print(_run(train, test, output, model))


@group.command(name='eval')
@click.option('--train', type=click.Path(), help='Labeled train CSV file.')
@click.option('--test', type=click.Path(), help='Unlabeled test CSV file.')
@click.option('--model', '-M', multiple=True, help='Model reference(s) to evaluate (default all configured).')
def evaluate(train: typing.Optional[str], test: typing.Optional[str], model: typing.Sequence[str]) -> None:
    """Print the validation reports without writing any predictions."""
    _print(_run(train, test, None, model))


@group.command(name='models')
def models() -> None:
    """List the configured models."""
    for config in _models(()):
        click.echo(f'{config.reference}: {config.provider} on {config.trainset} {dict(config.params)}')


def main() -> None:
    """Cli wrapper for handling survival exceptions."""
    try:
        group()  # pylint: disable=no-value-for-parameter
    except survival.AnyError as err:
        print(err, file=sys.stderr)
        sys.exit(1)
