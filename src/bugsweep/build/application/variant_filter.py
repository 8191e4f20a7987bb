"""Variant filtering: narrows which variants of a group get analysed."""

from typing import Callable, Iterable, List, Optional

from bugsweep.build.domain.models import Variant


class VariantFilter:
    """
    Include predicate over variants.

    Without a predicate every variant is included.
    """

    def __init__(self, include: Optional[Callable[[Variant], bool]] = None):
        self._include = include

    @classmethod
    def by_names(cls, names: Iterable[str]) -> "VariantFilter":
        """Include only variants whose name is listed."""
        allowed = frozenset(names)
        return cls(lambda variant: variant.name in allowed)

    def includes(self, variant: Variant) -> bool:
        return self._include is None or bool(self._include(variant))

    def filter(self, variants: Iterable[Variant]) -> List[Variant]:
        return [variant for variant in variants if self.includes(variant)]
