"""Core validation framework for JSON:API request documents.

A pipeline runs an ordered list of rules against one document. Each rule
covers a single concern and appends errors to the document; rules never
raise for expected violations. Exceptions raised by a rule are programming
or application faults and propagate to the caller unchanged.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from ..document import Document
from ..messages import Translator
from ..pointer import Pointer
from ..specification import FieldDescriptor, Specification

logger = logging.getLogger(__name__)

ROOT = Pointer.root()
DATA = ROOT.child("data")


@dataclass(frozen=True)
class ValidationContext:
    """Expectations and collaborators shared by the rules of one pipeline."""
    specification: Specification
    translator: Translator
    expected_type: str
    expected_id: str | None = None
    relation: FieldDescriptor | None = None


class ValidationRule(ABC):
    """Base class for validation rules."""

    def __init__(self, context: ValidationContext):
        self.context = context

    @property
    @abstractmethod
    def name(self) -> str:
        """Rule name for identification."""
        pass

    @abstractmethod
    def validate(self, document: Document) -> None:
        """Execute the rule, appending any errors to the document."""
        pass

    @property
    def specification(self) -> Specification:
        return self.context.specification

    @property
    def translator(self) -> Translator:
        return self.context.translator


Step = ValidationRule | Callable[[Document], Any]


def _step_name(step: Step) -> str:
    if isinstance(step, ValidationRule):
        return step.name
    return getattr(step, "__name__", type(step).__name__)


class ValidationPipeline:
    """Runs rules strictly in order against a document."""

    def __init__(self, steps: Iterable[Step] = ()):
        self.steps: list[Step] = list(steps)

    def add_rule(self, step: Step) -> None:
        self.steps.append(step)

    def run(self, document: Document) -> Document:
        logger.debug(f"Running {len(self.steps)} validation rules")

        for step in self.steps:
            logger.debug(f"Executing rule: {_step_name(step)}")
            # rule objects expose validate(); plain callables are called directly
            validate = getattr(step, "validate", None)
            if validate is not None:
                validate(document)
            else:
                step(document)

        return document
