# bigintcrypto/primality.py
# Miller-Rabin probable-prime testing
# - n-1 = d * 2^s decomposition (computed once per candidate)
# - single witness round
# - k-round witness loop with an explicit random source
#
# A composite survives one round with probability <= 1/4, so k rounds bound
# the false-positive rate by 4^-k. Callers pick k for their security level
# (40 is the usual choice for key sizes).

from __future__ import annotations
import random
from dataclasses import dataclass
from typing import Callable, Optional

import gmpy2
from gmpy2 import mpz

from .arith import IntLike, _powmod, positive_int, to_mpz
from .errors import InvalidArgument
from .trace import Hook, null_hook, resolve

_SYSTEM_RNG = random.SystemRandom()

def default_rng() -> random.Random:
    """OS-entropy source used when the caller passes no rng."""
    return _SYSTEM_RNG

# ---------- Decomposition ----------

@dataclass(frozen=True)
class Decomposition:
    """n - 1 = d * 2**s with d odd and s >= 1."""
    d: int
    s: int

def decompose(n: IntLike) -> Decomposition:
    n = to_mpz(n, "n")
    if n < 3 or gmpy2.is_even(n):
        raise InvalidArgument(f"decomposition needs an odd n >= 3, got {n}")
    m = n - 1
    s = gmpy2.bit_scan1(m)  # trailing zero bits of n-1
    return Decomposition(d=int(m >> s), s=int(s))

# ---------- Rounds ----------

def _round(n: "mpz", d: "mpz", s: int, a: "mpz") -> bool:
    x = _powmod(a, d, n)
    if x == 1 or x == n - 1:
        return True
    for _ in range(s - 1):
        x = _powmod(x, mpz(2), n)
        if x == n - 1:
            return True
    return False

def miller_rabin_round(n: IntLike, dec: Decomposition, a: IntLike) -> bool:
    """
    One strong-probable-prime round for witness a.
    True means a did not prove n composite.
    """
    n = to_mpz(n, "n")
    a = to_mpz(a, "a")
    if not 2 <= a <= n - 2:
        raise InvalidArgument(f"witness must lie in [2, n-2], got {a}")
    return _round(n, mpz(dec.d), dec.s, a)

def witness_rounds(n: "mpz", dec: Decomposition, rounds: int, rng: random.Random, *,
                   should_stop: Optional[Callable[[], bool]] = None,
                   hook: Hook = null_hook) -> Optional[bool]:
    """
    Run `rounds` independent rounds with witnesses drawn from rng.
    Returns False on the first round that proves n composite, True when all
    pass, None if should_stop() asked us to give up between rounds.
    """
    d = mpz(dec.d)
    hi = int(n) - 1  # randrange upper bound is exclusive -> a in [2, n-2]
    for i in range(rounds):
        if should_stop is not None and should_stop():
            return None
        a = mpz(rng.randrange(2, hi))
        passed = _round(n, d, dec.s, a)
        hook("round", {"bits": n.bit_length(), "round": i, "passed": passed})
        if not passed:
            return False
    return True

# ---------- Sequential tester ----------

def is_prime(n: IntLike, rounds: int, *, rng: Optional[random.Random] = None,
             hook: Optional[Hook] = None) -> bool:
    """Miller-Rabin with `rounds` random witnesses; False is always correct."""
    rounds = positive_int(rounds, "rounds")
    n = to_mpz(n, "n")
    hook = resolve(hook)
    if n == 2 or n == 3:
        return True
    if n < 2 or gmpy2.is_even(n):
        return False

    dec = decompose(n)
    verdict = witness_rounds(n, dec, rounds, default_rng() if rng is None else rng, hook=hook)
    hook("verdict", {"bits": n.bit_length(), "rounds": rounds, "prime": verdict})
    return bool(verdict)
