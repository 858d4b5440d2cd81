import random

from loguru import logger

from bkindex.bktree import BKTree, linear_scan
from bkindex.logger import configure_logging
from bkindex.metrics import WeightedHammingMetric


def verify_against_linear_scan(metric=None, trials=20, n_keys=2000, n_queries=200, seed=1234):
    """Build random trees and check every query against a brute-force scan."""
    rng = random.Random(seed)
    failures = 0
    for trial in range(trials):
        # Cluster keys around a few centers so small tolerances still hit something
        centers = [rng.getrandbits(64) for _ in range(8)]
        keys = []
        for _ in range(n_keys):
            key = rng.choice(centers)
            for _ in range(rng.randint(0, 6)):
                key ^= 1 << rng.randrange(64)
            keys.append(key)

        tree = BKTree(metric)
        tree.extend(keys)

        for _ in range(n_queries):
            needle = rng.choice(keys) ^ (1 << rng.randrange(64))
            tol = rng.randint(0, 10)
            found = tree.find(needle, tol)
            expected = linear_scan(keys, needle, tol, tree.metric)
            if sorted(found) != sorted(expected) or len(found) != len(set(found)):
                failures += 1
                logger.error(f"Trial {trial}: find({needle:#x}, {tol}) returned {len(found)} keys, expected {len(expected)}")

        logger.info(f"Trial {trial}: {tree.size()} keys, {n_queries} queries checked")
    return failures


if __name__ == "__main__":
    configure_logging("INFO")
    failures = verify_against_linear_scan()
    failures += verify_against_linear_scan(WeightedHammingMetric([1, 2, 3, 0] * 16), trials=5)
    if failures:
        logger.error(f"Verification failed: {failures} mismatched queries")
    else:
        logger.info("All verification checks passed!")
