from .arith import extended_gcd, mod_exp, mod_inverse
from .config import Settings, get_settings
from .errors import BigIntCryptoError, InvalidArgument, WorkerFailure
from .parallel import is_prime_concurrent, split_rounds
from .primality import Decomposition, decompose, is_prime, miller_rabin_round
from .search import next_prime, random_prime

__all__ = [
    "mod_exp", "extended_gcd", "mod_inverse",
    "is_prime", "is_prime_concurrent", "next_prime", "random_prime",
    "Decomposition", "decompose", "miller_rabin_round", "split_rounds",
    "Settings", "get_settings",
    "BigIntCryptoError", "InvalidArgument", "WorkerFailure",
]
