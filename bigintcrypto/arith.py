# bigintcrypto/arith.py
# Modular arithmetic building blocks on gmpy2 integers
# - square-and-multiply modular exponentiation
# - iterative extended Euclid (Bezout coefficients)
# - modular inverse on top of it

from __future__ import annotations
from typing import Tuple, Union

import gmpy2
from gmpy2 import mpz

from .errors import InvalidArgument

_MPZ = type(mpz(0))

IntLike = Union[int, str, bytes, bytearray, "mpz"]

# ---------- Coercion ----------

def to_mpz(x: IntLike, name: str = "value") -> "mpz":
    """Accept int / mpz / decimal str or bytes; anything else is a caller bug."""
    if isinstance(x, (bytes, bytearray)):
        x = x.decode()
    if isinstance(x, str):
        try:
            return mpz(x.strip(), 10)
        except ValueError:
            raise InvalidArgument(f"{name} is not a decimal integer: {x!r}") from None
    if isinstance(x, bool) or not isinstance(x, (int, _MPZ)):
        raise InvalidArgument(f"{name} must be an integer, got {type(x).__name__}")
    return mpz(x)

def positive_int(value, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, _MPZ)):
        raise InvalidArgument(f"{name} must be an integer, got {type(value).__name__}")
    if value < 1:
        raise InvalidArgument(f"{name} must be >= 1, got {value}")
    return int(value)

def _sign(x) -> int:
    return (x > 0) - (x < 0)

# ---------- ModExp ----------

def _powmod(base: "mpz", exponent: "mpz", modulus: "mpz") -> "mpz":
    """Square-and-multiply on pre-validated mpz inputs (exponent>=0, modulus>0)."""
    result = mpz(1) % modulus
    base = base % modulus
    while exponent:
        if gmpy2.is_odd(exponent):
            result = (result * base) % modulus
        base = (base * base) % modulus
        exponent >>= 1
    return result

def mod_exp(base: IntLike, exponent: IntLike, modulus: IntLike) -> int:
    """
    base**exponent mod modulus, result in [0, modulus).
    exponent=0 gives 1 % modulus (0 when modulus is 1).
    """
    base = to_mpz(base, "base")
    exponent = to_mpz(exponent, "exponent")
    modulus = to_mpz(modulus, "modulus")
    if exponent < 0:
        raise InvalidArgument(f"exponent must be >= 0, got {exponent}")
    if modulus <= 0:
        raise InvalidArgument(f"modulus must be > 0, got {modulus}")
    return int(_powmod(base, exponent, modulus))

# ---------- Extended Euclid ----------

def extended_gcd(a: IntLike, b: IntLike) -> Tuple[int, int, int]:
    """
    Return (g, x, y) with g = gcd(|a|, |b|) = a*x + b*y and g >= 0.
    Signed inputs are fine; (0, 0) gives (0, 0, 0).
    """
    a = to_mpz(a, "a")
    b = to_mpz(b, "b")
    if a == 0:
        return int(abs(b)), 0, _sign(b)
    if b == 0:
        return int(abs(a)), _sign(a), 0

    # invariant: old_r = a*old_x + b*old_y and r = a*x + b*y
    old_r, r = a, b
    old_x, x = mpz(1), mpz(0)
    old_y, y = mpz(0), mpz(1)
    while r:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_x, x = x, old_x - q * x
        old_y, y = y, old_y - q * y

    if old_r < 0:
        old_r, old_x, old_y = -old_r, -old_x, -old_y
    return int(old_r), int(old_x), int(old_y)

def mod_inverse(a: IntLike, m: IntLike) -> int:
    """d in [0, m) with a*d = 1 (mod m)."""
    a = to_mpz(a, "a")
    m = to_mpz(m, "m")
    if m <= 0:
        raise InvalidArgument(f"modulus must be > 0, got {m}")
    g, x, _ = extended_gcd(a % m, m)
    if g != 1:
        raise InvalidArgument(f"{a} has no inverse modulo {m} (gcd={g})")
    return int(x % m)
