# bigintcrypto/parallel.py
# Concurrent Miller-Rabin: the k rounds are split across W workers that all
# read the same (n, d, s). The answer is the conjunction of their verdicts,
# so it matches the sequential tester exactly; only wall time changes.
#
# One pool per call. The first composite verdict sets a cancel event that the
# remaining workers poll between rounds, and pending futures are cancelled.

from __future__ import annotations
import concurrent.futures
import multiprocessing
import os
import random
import threading
from dataclasses import dataclass
from typing import List, Optional

import gmpy2
from gmpy2 import mpz

from .arith import IntLike, positive_int, to_mpz
from .config import EXECUTORS, get_settings
from .errors import InvalidArgument, WorkerFailure
from .primality import Decomposition, decompose, default_rng, witness_rounds
from .trace import Hook, resolve

# set in each pool process by _init_worker
_CANCEL = None

def _init_worker(cancel) -> None:
    global _CANCEL
    _CANCEL = cancel

def split_rounds(rounds: int, workers: int) -> List[int]:
    """
    Even partition of `rounds` into at most `workers` positive shares.
    The shares always sum to `rounds`.
    """
    rounds = positive_int(rounds, "rounds")
    workers = positive_int(workers, "workers")
    base, extra = divmod(rounds, workers)
    shares = [base + (1 if i < extra else 0) for i in range(workers)]
    return [s for s in shares if s > 0]

@dataclass
class WorkerVerdict:
    worker: int
    rounds: int
    passed: Optional[bool]

def _witness_worker(worker: int, n: int, d: int, s: int, rounds: int, seed: int,
                    cancel=None) -> WorkerVerdict:
    """Pool entry point. Plain ints in and out so it pickles cleanly."""
    cancel = _CANCEL if cancel is None else cancel
    rng = random.Random(seed)
    stop = cancel.is_set if cancel is not None else None
    passed = witness_rounds(mpz(n), Decomposition(d=d, s=s), rounds, rng, should_stop=stop)
    return WorkerVerdict(worker=worker, rounds=rounds, passed=passed)

def _pool_size(kind: str, tasks: int) -> int:
    """Processes are capped at the CPU count; extra shares queue behind them."""
    if kind == "process":
        return min(tasks, os.cpu_count() or 1)
    return tasks

def _make_pool(kind: str, size: int):
    if kind == "process":
        ctx = multiprocessing.get_context()
        cancel = ctx.Event()
        pool = concurrent.futures.ProcessPoolExecutor(
            max_workers=size, mp_context=ctx,
            initializer=_init_worker, initargs=(cancel,),
        )
        return pool, cancel, None
    cancel = threading.Event()
    pool = concurrent.futures.ThreadPoolExecutor(max_workers=size,
                                                 thread_name_prefix="mr-worker")
    return pool, cancel, cancel

def is_prime_concurrent(n: IntLike, rounds: int, workers: int, *,
                        rng: Optional[random.Random] = None,
                        executor: Optional[str] = None,
                        hook: Optional[Hook] = None) -> bool:
    """
    Miller-Rabin with `rounds` witnesses spread over `workers` pool workers.
    executor is "process" (default from settings) or "thread".
    Raises WorkerFailure if any worker dies; a missing verdict never passes.
    """
    rounds = positive_int(rounds, "rounds")
    workers = positive_int(workers, "workers")
    if executor is None:
        executor = get_settings().executor
    if not isinstance(executor, str) or executor.lower() not in EXECUTORS:
        raise InvalidArgument(f"executor must be one of {EXECUTORS}, got {executor!r}")
    kind = executor.lower()
    n = to_mpz(n, "n")
    hook = resolve(hook)
    if n == 2 or n == 3:
        return True
    if n < 2 or gmpy2.is_even(n):
        return False

    dec = decompose(n)
    shares = split_rounds(rounds, workers)
    rng = default_rng() if rng is None else rng
    seeds = [rng.getrandbits(128) for _ in shares]

    pool, cancel, direct = _make_pool(kind, _pool_size(kind, len(shares)))
    verdict = True
    with pool:
        futures = {
            pool.submit(_witness_worker, i, int(n), dec.d, dec.s, share, seeds[i], direct): i
            for i, share in enumerate(shares)
        }
        passes = 0
        try:
            for fut in concurrent.futures.as_completed(futures):
                idx = futures[fut]
                try:
                    res = fut.result()
                except Exception as e:
                    raise WorkerFailure(f"worker {idx} failed: {e!r}", worker=idx) from e
                hook("worker", {"bits": n.bit_length(), "worker": idx,
                                "rounds": res.rounds, "passed": res.passed})
                if res.passed is False:
                    verdict = False
                    break
                if res.passed:
                    passes += 1
        finally:
            cancel.set()
            for fut in futures:
                fut.cancel()

        if verdict and passes != len(futures):
            raise WorkerFailure(f"only {passes} of {len(futures)} workers reported a verdict")

    hook("verdict", {"bits": n.bit_length(), "rounds": rounds,
                     "workers": len(shares), "prime": verdict})
    return verdict
