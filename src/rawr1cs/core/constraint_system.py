from __future__ import annotations
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Callable, Optional

from .variables import LinearCombination, Variable, ONE

# deferred values: thunks a constraint system may call or ignore
Thunk = Optional[Callable[[], Any]]
LCBuilder = Callable[[LinearCombination], LinearCombination]

class SynthesisError(Exception):
    """Raised by a circuit that cannot finish allocating or constraining."""

class ConstraintSystem(ABC):
    """
    Operations a circuit is written against.
    Names, annotations and values are passed as thunks; an implementation
    that has no use for them must not call them.
    """

    @staticmethod
    def one() -> Variable:
        return ONE

    @abstractmethod
    def allocate_auxiliary(self, annotation: Thunk = None, value: Thunk = None) -> Variable:
        ...

    @abstractmethod
    def allocate_input(self, annotation: Thunk = None, value: Thunk = None) -> Variable:
        ...

    @abstractmethod
    def enforce(self, annotation: Thunk, a: LCBuilder, b: LCBuilder, c: LCBuilder) -> None:
        ...

    @abstractmethod
    def push_namespace(self, name: Thunk) -> None:
        ...

    @abstractmethod
    def pop_namespace(self) -> None:
        ...

    @abstractmethod
    def root(self) -> "ConstraintSystem":
        ...

    @contextmanager
    def namespace(self, name: Thunk):
        root = self.root()
        root.push_namespace(name)
        try:
            yield self
        finally:
            root.pop_namespace()

class Circuit(ABC):
    @abstractmethod
    def synthesize(self, cs: ConstraintSystem) -> None:
        ...
