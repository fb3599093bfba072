"""Congruence values and the residue-merging engine.

A `Congruence` records that an unknown integer is congruent to `r` modulo `m`. Congruences are combined with
`extend` (coprime moduli, classic CRT) and `merge` (any moduli, peeling shared prime powers with `exclude`), so that
folding every observation of an integer yields its residue modulo the lcm of all moduli.

Typical usage example:

    a = Congruence.make(19122025, 32)
    b = Congruence.make(19122025, 12)
    c = a.merge(b)
    c.verify(19122025)
    reconstruct(19122025, [32, 12, 28, 77])
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from crtutils.euclid import bezout


class IncompatibleModuliError(ValueError):
    """Raised by a checked `extend` when the moduli are not coprime."""


class InconsistentEvidenceError(ValueError):
    """Raised by a checked `merge` when two residues cannot describe the same integer."""


def into_mod(n: int, m: int) -> int:
    """Canonicalizes `n` into the range [0, m).

    Args:
        n: Any integer, negative ones included.
        m: The modulus. Must be positive.

    Returns:
        The non-negative residue of `n` modulo `m`.

    Raises:
        ValueError: If `m` is not positive.
    """
    if m <= 0:
        raise ValueError(f"Modulus must be positive, got {m}")
    return (n % m + m) % m


@dataclass(frozen=True)
class Congruence:
    """An immutable residue class, the unknown integer being congruent to `r` modulo `m`.

    Every combinator returns a fresh value, nothing is ever modified in place.

    Attributes:
        r: The canonical residue, 0 <= r < m.
        m: The modulus, m >= 1.
    """

    r: int = 0
    m: int = 1

    def __post_init__(self) -> None:
        if self.m < 1:
            raise ValueError(f"Modulus must be positive, got {self.m}")
        if not 0 <= self.r < self.m:
            raise ValueError(f"Residue {self.r} is not in range [0, {self.m - 1}]")

    def __iter__(self) -> Iterator[int]:
        yield self.r
        yield self.m

    @classmethod
    def identity(cls) -> "Congruence":
        """The congruence carrying no information, neutral element of `merge`."""
        return cls(0, 1)

    @classmethod
    def make(cls, n: int, m: int) -> "Congruence":
        """Creates the congruence of `n` modulo `m`.

        Args:
            n: The observed integer, may be negative.
            m: The modulus.

        Returns:
            The canonical congruence (n mod m, m).

        Raises:
            ValueError: If `m` is not positive.
        """
        return cls(into_mod(n, m), m)

    def _extend(self, m1: int, r1: int) -> "Congruence":
        # gcd(self.m, m1) == 1 presumed.
        u, v, _ = bezout(self.m, m1)
        mod = self.m * m1
        ans = r1 * u * self.m + self.r * v * m1
        return Congruence(into_mod(ans, mod), mod)

    def extend(self, m1: int, r1: int, check: bool = False) -> "Congruence":
        """Combines with the observation `r1` modulo `m1`, the moduli being coprime.

        With u*m0 + v*m1 = 1 the candidate r1*u*m0 + r0*v*m1 reduces to r0 modulo m0 and to r1 modulo m1.
        Non-coprime moduli break that argument and silently yield a meaningless residue, unless `check` is set.

        Args:
            m1: The modulus of the observation.
            r1: The residue of the observation, need not be canonical.
            check: Whether to verify that the moduli are coprime.

        Returns:
            The combined congruence modulo self.m * m1.

        Raises:
            ValueError: If `m1` is not positive.
            IncompatibleModuliError: If `check` is set and gcd(self.m, m1) != 1.
        """
        if m1 <= 0:
            raise ValueError(f"Modulus must be positive, got {m1}")
        if check:
            _, _, c = bezout(self.m, m1)
            if c != 1:
                raise IncompatibleModuliError(f"Moduli {self.m} and {m1} are not coprime (gcd: {c})")
        return self._extend(m1, r1)

    def merge(self, other: "Congruence", check: bool = False) -> "Congruence":
        """Merges two congruences of the same integer into one modulo lcm(self.m, other.m).

        Coprime moduli are handed straight to `extend`. Otherwise the prime powers of `other.m` dominated by `self.m`
        are excluded from `other`, the prime powers of `self.m` reached by what remains of `other.m` are excluded from
        `self`, and the now coprime leftovers are extended.

        Args:
            other: The congruence to merge with.
            check: Whether to verify that both residues agree on their common modulus.

        Returns:
            The merged congruence.

        Raises:
            InconsistentEvidenceError: If `check` is set and the residues differ modulo gcd(self.m, other.m).
        """
        _, _, c = bezout(self.m, other.m)
        if check and self.r % c != other.r % c:
            raise InconsistentEvidenceError(f"{self!r} and {other!r} disagree modulo {c}")
        if c == 1:
            return self._extend(other.m, other.r)
        prevail = self.m // c
        # Drop the prime powers of other.m that have higher orders in self.m.
        reduced = other.exclude(prevail)
        # Drop the prime powers of self.m that have the same or higher orders in other.m.
        return self.exclude(reduced.m)._extend(reduced.m, reduced.r)

    def exclude(self, target: int) -> "Congruence":
        """Strips every prime-power layer that the modulus shares with `target`.

        Peels gcd(m, target) off the modulus, then keeps peeling with the gcd just removed until the modulus is
        coprime to it. Each pass at least halves the modulus.

        Args:
            target: The integer whose prime factors are to be removed from the modulus.

        Returns:
            A congruence whose modulus is coprime to `target`.

        Raises:
            ValueError: If `target` is not positive.
        """
        if target < 1:
            raise ValueError(f"Exclusion target must be positive, got {target}")
        m = self.m
        _, _, c = bezout(m, target)
        while c != 1:
            m //= c
            _, _, c = bezout(m, c)
        if m == self.m:
            return self
        return Congruence(self.r % m, m)

    def verify(self, n: int) -> bool:
        """Checks whether `n` belongs to this residue class.

        Args:
            n: The known integer.

        Returns:
            True if n mod m == r, False otherwise.
        """
        return n % self.m == self.r

    def describe(self, n: int) -> str:
        """Renders the comparison made by `verify` for manual inspection."""
        return f" {{remainder: {self.r}}} == {n % self.m}( <{n}> mod {self.m} )"


def combine(observations: Iterable[tuple[int, int]], check: bool = False) -> Congruence:
    """Folds (residue, modulus) observations of one integer into a single congruence.

    Args:
        observations: The (residue, modulus) pairs.
        check: Whether each merge verifies the observations agree.

    Returns:
        The congruence modulo the lcm of all moduli. The identity for no observations.

    Raises:
        ValueError: If a modulus is not positive.
        InconsistentEvidenceError: If `check` is set and two observations contradict each other.
    """
    result = Congruence.identity()
    for r, m in observations:
        result = result.merge(Congruence.make(r, m), check)
    return result


def trace_reconstruct(n: int, moduli: Iterable[int]) -> Iterator[tuple[Congruence, Congruence]]:
    """Reconstructs `n` step by step from its residues.

    Args:
        n: The known integer.
        moduli: The moduli to reduce `n` against.

    Yields:
        The observation merged in, and the running result after merging it.
    """
    result = Congruence.identity()
    for m in moduli:
        observed = Congruence.make(n, m)
        result = result.merge(observed)
        yield observed, result


def reconstruct(n: int, moduli: Iterable[int], check: bool = False) -> Congruence:
    """Reduces `n` against every modulus and merges the residues back together.

    Args:
        n: The known integer.
        moduli: The moduli to reduce `n` against.
        check: Whether each merge verifies the residues agree.

    Returns:
        The congruence of `n` modulo the lcm of `moduli`.
    """
    return combine(((n, m) for m in moduli), check)
