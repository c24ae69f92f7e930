import math
import random

import pytest
from gmpy2 import mpz

from bigintcrypto import InvalidArgument, extended_gcd, mod_exp, mod_inverse


def test_mod_exp_known_value():
    assert mod_exp(4, 13, 497) == 445


def test_mod_exp_matches_repeated_multiplication():
    rng = random.Random(1234)
    for _ in range(300):
        b = rng.randrange(-50, 200)
        e = rng.randrange(0, 30)
        m = rng.randrange(1, 500)
        ref = 1
        for _ in range(e):
            ref *= b
        assert mod_exp(b, e, m) == ref % m


def test_mod_exp_big_operands():
    n = 2**521 - 1
    assert mod_exp(3, n - 1, n) == 1  # Fermat on a Mersenne prime
    assert mod_exp(12345678901234567890, 65537, n) == pow(12345678901234567890, 65537, n)


def test_mod_exp_zero_exponent():
    assert mod_exp(7, 0, 13) == 1
    assert mod_exp(7, 0, 1) == 0
    assert mod_exp(0, 0, 5) == 1


def test_mod_exp_accepts_mpz_and_strings():
    assert mod_exp(mpz(4), "13", b"497") == 445
    assert isinstance(mod_exp(mpz(4), 13, 497), int)


@pytest.mark.parametrize("args", [(2, -1, 7), (2, 3, 0), (2, 3, -7)])
def test_mod_exp_rejects_bad_arguments(args):
    with pytest.raises(InvalidArgument):
        mod_exp(*args)


def test_mod_exp_invalid_argument_is_value_error():
    with pytest.raises(ValueError):
        mod_exp(2, -1, 7)
    with pytest.raises(InvalidArgument):
        mod_exp(2.5, 3, 7)
    with pytest.raises(InvalidArgument):
        mod_exp("12x", 3, 7)


def test_extended_gcd_bezout_identity():
    rng = random.Random(99)
    for _ in range(500):
        a = rng.randrange(-10**30, 10**30)
        b = rng.randrange(-10**30, 10**30)
        g, x, y = extended_gcd(a, b)
        assert g == math.gcd(a, b)
        assert a * x + b * y == g


def test_extended_gcd_small_cases():
    assert extended_gcd(240, 46) == (2, -9, 47)
    g, x, y = extended_gcd(17, 5)
    assert g == 1 and 17 * x + 5 * y == 1


def test_extended_gcd_zero_operands():
    assert extended_gcd(0, 5) == (5, 0, 1)
    assert extended_gcd(0, -5) == (5, 0, -1)
    assert extended_gcd(7, 0) == (7, 1, 0)
    assert extended_gcd(-7, 0) == (7, -1, 0)
    assert extended_gcd(0, 0) == (0, 0, 0)


def test_extended_gcd_negative_inputs_give_nonnegative_gcd():
    g, x, y = extended_gcd(-12, -18)
    assert g == 6
    assert -12 * x + -18 * y == 6


def test_mod_inverse():
    assert mod_inverse(3, 11) == 4
    assert mod_inverse(-3, 11) == 7
    e, phi = 65537, (61 - 1) * (53 - 1)
    d = mod_inverse(e, phi)
    assert 0 <= d < phi and (e * d) % phi == 1


def test_mod_inverse_not_invertible():
    with pytest.raises(InvalidArgument):
        mod_inverse(6, 9)
    with pytest.raises(InvalidArgument):
        mod_inverse(3, 0)
