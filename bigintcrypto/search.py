# bigintcrypto/search.py
# Prime candidate search on top of the Miller-Rabin testers.
#
# next_prime is inclusive: a probable-prime n is returned as-is. Candidates
# are walked upward over odd numbers only; there is no upper bound, which is
# fine for random cryptographic-size starts (prime gaps are tiny relative to
# the candidate) but not guaranteed for adversarial input.

from __future__ import annotations
import random
from typing import Optional, Union

import gmpy2

from .arith import IntLike, positive_int, to_mpz
from .config import get_settings
from .errors import InvalidArgument
from .parallel import is_prime_concurrent
from .primality import default_rng, is_prime
from .trace import Hook, resolve

def _tester(rounds: int, workers: Union[int, str, None], rng, hook: Hook):
    if workers is None:
        return lambda c: is_prime(c, rounds, rng=rng, hook=hook)
    if workers == "auto":
        workers = get_settings().workers
    workers = positive_int(workers, "workers")
    return lambda c: is_prime_concurrent(c, rounds, workers, rng=rng, hook=hook)

def next_prime(n: IntLike, *, rounds: Optional[int] = None,
               workers: Union[int, str, None] = None,
               rng: Optional[random.Random] = None,
               hook: Optional[Hook] = None, return_iters: bool = False):
    """
    Smallest probable prime p >= n.
    workers=None tests sequentially; an int (or "auto") uses the concurrent
    tester with that many workers. return_iters=True gives (p, tested).
    """
    rounds = get_settings().rounds if rounds is None else positive_int(rounds, "rounds")
    hook = resolve(hook)
    test = _tester(rounds, workers, rng, hook)
    n = to_mpz(n, "n")
    if n <= 2:
        return (2, 0) if return_iters else 2
    if gmpy2.is_even(n):
        n += 1

    iters = 0
    while True:
        iters += 1
        found = test(n)
        hook("candidate", {"bits": n.bit_length(), "iters": iters, "prime": found})
        if found:
            return (int(n), iters) if return_iters else int(n)
        n += 2

def random_prime(bits: int, *, rounds: Optional[int] = None,
                 rng: Optional[random.Random] = None,
                 hook: Optional[Hook] = None) -> int:
    """Random probable prime with exactly `bits` bits."""
    if isinstance(bits, bool) or not isinstance(bits, int) or bits < 2:
        raise InvalidArgument(f"bits must be an integer >= 2, got {bits!r}")
    rounds = get_settings().rounds if rounds is None else positive_int(rounds, "rounds")
    rng = default_rng() if rng is None else rng
    hook = resolve(hook)
    if bits == 2:
        return rng.choice((2, 3))
    while True:
        c = rng.getrandbits(bits)
        c |= (1 << (bits - 1)) | 1  # top bit + odd
        found = is_prime(c, rounds, rng=rng, hook=hook)
        hook("candidate", {"bits": bits, "prime": found})
        if found:
            return c
