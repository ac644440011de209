import argparse
import random

import pandas as pd
import matplotlib.pyplot as plt
import des
import keys
from typing import Iterable, Optional

def bit_flips(a: int, b: int) -> int:
    return bin(a ^ b).count("1")

def avalanche_frame(trials: int, rounds: Iterable[int] = range(1, 17), seed: Optional[int] = None) -> pd.DataFrame:
    """
    Measure how many ciphertext bits change when one plaintext bit is flipped.

    For every round count a fresh random key and plaintext are drawn per
    trial, one random plaintext bit is flipped, and both blocks go through
    the reduced-round cipher.
    """
    rng = random.Random(seed)
    x = list(rounds)
    means = []
    stds = []
    for n in x:
        flips = []
        for _ in range(trials):
            subkeys = keys.round_keys(rng.getrandbits(64))
            pt = rng.getrandbits(64)
            pt_ = pt ^ (1 << rng.randrange(64))
            ct = des.encode_block_rounds(pt, subkeys, True, rounds=n)
            ct_ = des.encode_block_rounds(pt_, subkeys, True, rounds=n)
            flips.append(bit_flips(ct, ct_))
        s = pd.Series(flips, dtype=float)
        means.append(s.mean())
        stds.append(s.std(ddof=0))

    return pd.DataFrame({
        'Rounds': x,
        'Flipped_Bits': means,
        'Std': stds,
    })

def plot_avalanche(df: pd.DataFrame, output: Optional[str] = None):
    plt.figure(figsize=(6, 6))
    plt.errorbar(df['Rounds'], df['Flipped_Bits'], yerr=df['Std'], marker='o', linestyle='-', color='red', capsize=3)
    plt.axhline(32, linestyle=':', color='gray')

    plt.xlabel('Number of Rounds', fontsize=12)
    plt.ylabel('Ciphertext Bits Changed (of 64)', fontsize=12)

    plt.ylim(0, 64)
    plt.xlim(0, 17)

    plt.grid(True, linestyle='--', alpha=0.7)

    plt.tight_layout()
    if output:
        plt.savefig(output)
        plt.close()
    else:
        plt.show()

if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument('--trials', type=int, default=200)
    parser.add_argument('--seed', type=int, default=None)
    parser.add_argument('--output', default=None, help="save the plot here instead of showing it")
    args = parser.parse_args()

    df = avalanche_frame(args.trials, seed=args.seed)
    print(df.to_string(index=False))
    plot_avalanche(df, args.output)
