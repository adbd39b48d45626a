"""Pluggable lookalike detectors consulted by the enhanced analysis pass.

A detector inspects a hostname and either returns ``None`` or a
``LookalikeFinding`` describing why the host imitates a brand.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from .lexicon import BRAND_FRAGMENTS, LOOKALIKE_SEQUENCES


@dataclass(frozen=True)
class LookalikeFinding:
    reason: str
    risk_points: int
    brand: Optional[str] = None


class LookalikeDetector(Protocol):
    name: str

    def inspect(self, domain: str) -> Optional[LookalikeFinding]:
        ...


class LetterSequenceDetector:
    """Flags hosts that spell a brand with look-alike letter pairs (``rn`` for ``m``).

    The host is rewritten with every substitution; a hit needs a brand
    fragment present in the rewritten host but absent from the raw one, so
    ``modern.com`` stays clean while ``rnicrosoft.com`` does not.
    """

    name = "letter_sequence"

    def __init__(self, sequences: Sequence[tuple[str, str]] = LOOKALIKE_SEQUENCES, risk_points: int = 35):
        self.sequences = tuple(sequences)
        self.risk_points = risk_points

    def inspect(self, domain: str) -> Optional[LookalikeFinding]:
        host = domain.lower()
        for sequence, replacement in self.sequences:
            if sequence not in host:
                continue
            rewritten = host.replace(sequence, replacement)
            for brand, fragments in BRAND_FRAGMENTS:
                for fragment in fragments:
                    if fragment in rewritten and fragment not in host:
                        return LookalikeFinding(
                            reason=f"Possible advanced homograph attack detected ({sequence} -> {replacement})",
                            risk_points=self.risk_points,
                            brand=brand,
                        )
        return None


def default_detectors() -> list[LookalikeDetector]:
    return [LetterSequenceDetector()]
