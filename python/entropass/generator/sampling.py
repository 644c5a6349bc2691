"""
Sampling strategies for constrained passwords.

Three strategies are tried in a fixed order, each one only when the previous
one gave up:

1. Rejection sampling: draw the whole password uniformly from the pool and
   retry while a required class is missing. Uniform over valid passwords.
2. Combinatorial unranking: draw a uniform rank in [0, T) and map it to the
   rank-th valid password. Also uniform, used when rejection keeps failing.
3. Guaranteed inclusion: one character per class, the rest from the pool.
   Always succeeds but is biased, so its entropy is computed differently.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from .pool import ActiveSetConfiguration
from ..analysis.combinatorics import RemainingCounter, count_valid_sequences
from ..exceptions import InvariantViolationError, SamplingError
from ..methods import Method
from ..utils.random_source import draw, shuffle, uniform_big_int, uniform_int


logger = logging.getLogger(__name__)

MAX_REJECTION_ATTEMPTS = 1000


def covers_all(chars: Sequence[str], active_sets: Sequence[str]) -> bool:
    """Check that every class has at least one character in ``chars``."""
    present = set(chars)
    return all(present & set(s) for s in active_sets)


def try_rejection_sampling(length: int,
                           pool: str,
                           active_sets: Sequence[str],
                           force_each: bool,
                           max_attempts: int = MAX_REJECTION_ATTEMPTS) -> Optional[List[str]]:
    """
    Draw uniform passwords until one covers every class.

    Args:
        length: Password length
        pool: All characters of the active classes
        active_sets: Active classes
        force_each: Require every class; when False the first draw is accepted
        max_attempts: Attempts before giving up

    Returns:
        Character list, or None if every attempt missed a class
    """
    for attempt in range(1, max_attempts + 1):
        candidate = draw(pool, length)

        if force_each and not covers_all(candidate, active_sets):
            continue

        logger.debug(f"Rejection sampling accepted on attempt {attempt}")
        return candidate

    logger.debug(f"Rejection sampling gave up after {max_attempts} attempts")
    return None


def unrank(rank: int,
           length: int,
           active_sets: Sequence[str],
           counter: Optional[RemainingCounter] = None) -> List[str]:
    """
    Map ``rank`` in [0, T) to the rank-th class-covering sequence.

    Positions are filled left to right. At each position the classes are
    tried in order; choosing class ``c`` leaves ``ways`` completions, so the
    class owns a block of ``len(c) * ways`` ranks. Inside that block the
    quotient by ``ways`` picks the character and the remainder carries on.

    Args:
        rank: Index of the sequence to build
        length: Sequence length
        active_sets: Active classes
        counter: Memoized completion counter; a fresh one is made if omitted

    Returns:
        Character list of length ``length``

    Raises:
        SamplingError: If ``rank`` is outside [0, T) or no class accepts a position
    """
    sizes = [len(s) for s in active_sets]
    if counter is None:
        counter = RemainingCounter(sizes)

    total = counter(length, 0)
    if rank < 0 or rank >= total:
        raise SamplingError(f"Rank {rank} outside [0, {total})")

    mask = 0
    result: List[str] = []

    for position in range(length):
        rem_len = length - 1 - position

        for idx, chars in enumerate(active_sets):
            next_mask = mask | (1 << idx)
            ways = counter(rem_len, next_mask)
            if ways == 0:
                continue

            block = sizes[idx] * ways
            if rank < block:
                result.append(chars[rank // ways])
                rank %= ways
                mask = next_mask
                break

            rank -= block
        else:
            raise SamplingError(f"No class accepted position {position}")

    logger.debug(f"Unranking used {counter.cache_size} memoized counts, {counter.hits} cache hits")
    return result


def generate_combinatorial(length: int, active_sets: Sequence[str]) -> List[str]:
    """
    Uniform class-covering password via combinatorial unranking.

    Raises:
        SamplingError: If no valid sequence exists or unranking fails
    """
    total = count_valid_sequences(length, [len(s) for s in active_sets])
    if total <= 0:
        raise SamplingError("No valid sequences for this configuration")

    rank = uniform_big_int(total)
    return unrank(rank, length, active_sets, RemainingCounter([len(s) for s in active_sets]))


def generate_guaranteed(length: int, pool: str, active_sets: Sequence[str]) -> List[str]:
    """
    One character from each class, then fill from the whole pool.

    The output is deliberately not uniform over valid passwords; see
    ``calculate_shannon_entropy_guaranteed``.
    """
    chars = [s[uniform_int(len(s))] for s in active_sets]
    chars.extend(draw(pool, length - len(chars)))
    return chars


def sample(config: ActiveSetConfiguration,
           max_attempts: int = MAX_REJECTION_ATTEMPTS) -> Tuple[List[str], str]:
    """
    Run the strategies in order and shuffle the winner.

    Args:
        config: Validated configuration
        max_attempts: Attempts for rejection sampling

    Returns:
        (shuffled characters, method tag)

    Raises:
        InvariantViolationError: If no strategy produced a valid password
    """
    length = config.length
    pool = config.pool
    active_sets = config.active_sets

    chars = try_rejection_sampling(length, pool, active_sets, config.force_each, max_attempts)
    method = Method.REJECTION_SAMPLING

    if chars is None and config.force_each:
        try:
            chars = generate_combinatorial(length, active_sets)
            method = Method.COMBINATORIAL_SAMPLING
        except Exception as e:
            logger.warning(f"Combinatorial sampling failed, using guaranteed inclusion: {e}")
            chars = None

    if chars is None:
        chars = generate_guaranteed(length, pool, active_sets)
        method = Method.GUARANTEED_INCLUSION
        logger.warning("Falling back to guaranteed inclusion; entropy is reported as Shannon entropy")

    if len(chars) != length or (config.force_each and not covers_all(chars, active_sets)):
        raise InvariantViolationError(f"{method} produced an invalid password")

    # Tiers 2 and 3 emit characters in class order
    shuffle(chars)
    return chars, method
