"""Advice engine — compute dependency advice from usage facts."""

from depadvice.engines.advice.advisor import Advisor, compute
from depadvice.engines.advice.computed import Advice, AdviceKind, ComputedAdvice
from depadvice.engines.advice.facts import DependencyFacts

__all__ = [
    "Advice",
    "AdviceKind",
    "Advisor",
    "ComputedAdvice",
    "DependencyFacts",
    "compute",
]
