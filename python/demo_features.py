#!/usr/bin/env python3
"""
Demo script to show the sampling tiers and the entropy each one reports.
"""

from unittest.mock import patch

from entropass.analysis import count_valid_sequences, log2_bigint, max_entropy
from entropass.generator import GenerationOptions, generate, prepare_active_sets
from entropass.methods import METHODS


def demo_counting():
    """Demo exact counting against the unconstrained pool."""
    print("🔢 EXACT COUNTING DEMO")
    print("=" * 50)

    for length in [5, 8, 12, 18, 32]:
        config = prepare_active_sets(GenerationOptions(length=length, exclude_ambiguous=True))
        total = count_valid_sequences(config.length, config.set_sizes)
        share = total / config.pool_size ** config.length
        print(f"   L={length:3d}  valid={total:.3e}  share of pool^L={share:.4f}  "
              f"H={log2_bigint(total):.3f} bits")


def demo_methods():
    """Demo the three tiers on the same configuration."""
    print("\n\n🎲 SAMPLING TIER DEMO")
    print("=" * 50)

    options = GenerationOptions(length=12)
    config = prepare_active_sets(options)
    print(f"   Unconstrained maximum: {max_entropy(config.length, config.pool_size):.3f} bits")

    result = generate(options)
    print(f"\n1. {result.method}: {result.password}  ({result.entropy_bits:.3f} bits)")

    with patch("entropass.generator.sampling.try_rejection_sampling", return_value=None):
        result = generate(options)
    print(f"2. {result.method}: {result.password}  ({result.entropy_bits:.3f} bits)")

    with patch("entropass.generator.sampling.try_rejection_sampling", return_value=None), \
            patch("entropass.generator.sampling.generate_combinatorial", side_effect=MemoryError):
        result = generate(options)
    print(f"3. {result.method}: {result.password}  ({result.entropy_bits:.3f} bits)")

    print(f"\n✅ All {len(METHODS)} tiers produce a valid password")
    print("   - Tiers 1 and 2 are uniform and share the Hartley entropy")
    print("   - Tier 3 is biased and reports its lower Shannon entropy")


def main():
    demo_counting()
    demo_methods()


if __name__ == "__main__":
    main()
