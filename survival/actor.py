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
Actor abstraction.
"""

import abc
import logging
import typing

import cloudpickle

import survival

LOGGER = logging.getLogger(__name__)


def name(actor: typing.Any, **kwargs) -> str:
    """Infer the name of given instance or type.

    Args:
        actor: Type or actor instance.
        **kwargs: Optional keyword parameters.

    Returns:
        String name representation.
    """
    value = actor.__name__ if hasattr(actor, '__name__') else repr(actor)
    if kwargs:
        value += '(' + ', '.join(f'{k}={v!r}' for k, v in kwargs.items()) + ')'
    return value


# Actor features type.
Features = typing.TypeVar('Features')

# Actor labels type.
Labels = typing.TypeVar('Labels')

# Actor apply result type.
Result = typing.TypeVar('Result')


class Actor(typing.Generic[Features, Labels, Result], metaclass=abc.ABCMeta):
    """Abstract actor base class.

    Concrete actors can register themselves under an alias used to refer to them from the config::

        class Rule(Actor, alias='rule'):
            ...
    """

    ALIASES: dict[str, type['Actor']] = {}

    def __init_subclass__(cls, alias: typing.Optional[str] = None, **kwargs):
        super().__init_subclass__(**kwargs)
        if alias:
            if alias in Actor.ALIASES:
                raise survival.UnexpectedError(f'Actor alias {alias} already registered')
            Actor.ALIASES[alias] = cls

    @classmethod
    def lookup(cls, alias: str) -> type['Actor']:
        """Get the actor type registered under the given alias.

        Args:
            alias: Actor alias.

        Returns:
            Actor type.
        """
        try:
            return Actor.ALIASES[alias]
        except KeyError as err:
            raise survival.MissingError(f'Unknown actor {alias} (known: {", ".join(sorted(Actor.ALIASES))})') from err

    def __repr__(self):
        return name(self.__class__, **self.get_params())

    @abc.abstractmethod
    def apply(self, features: Features) -> Result:
        """The *apply* mode entry-point.

        Args:
            features: Input feature-set.

        Returns:
            Transformation result (i.e. predictions).
        """

    def train(self, features: Features, labels: Labels, /) -> None:
        """The *train* mode entry point.

        Optional method implemented by stateful actors.

        Args:
            features: Train feature-set.
            labels: Train labels.
        """
        raise survival.UnexpectedError('Stateless actor')

    def get_state(self) -> bytes:
        """Return the internal state of the actor.

        The default implementation is using cloudpickle for serializing the entire actor object.

        Returns:
            State as bytes.
        """
        if not self.is_stateful():
            return b''
        LOGGER.debug('Getting %s state', self)
        return cloudpickle.dumps(self.__dict__)

    def set_state(self, state: bytes) -> None:
        """Set the new internal state of the actor.

        Args:
            state: Bytes to be used as internal state.
        """
        if not state:
            return
        if not self.is_stateful():
            raise survival.UnexpectedError('State provided but actor stateless')
        LOGGER.debug('Setting %s state (%d bytes)', self, len(state))
        params = self.get_params()  # keep the original hyper-params
        self.__dict__.update(cloudpickle.loads(state))
        self.set_params(**params)  # restore the original hyper-params

    def get_params(self) -> typing.Mapping[str, typing.Any]:
        """Get the current hyper-parameters of the actor.

        Returns:
            Dictionary of the name-value of the hyper-parameters.
        """
        return {}

    def set_params(self, **params: typing.Any) -> None:
        """Set new hyper-parameters of the actor.

        Args:
            params: New hyper-parameters as keyword arguments.
        """
        if params:
            raise NotImplementedError(f'Params setter for {params} not implemented on {self}')

    @classmethod
    def is_stateful(cls) -> bool:
        """Check whether this actor is stateful.

        By default, this is determined based on the existence of user-overridden train method.

        Returns:
            True if stateful.
        """
        return cls.train.__code__ is not Actor.train.__code__
