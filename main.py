import logging
import math
import os
from time import sleep, perf_counter

from sequence import sequence

logging.basicConfig(level=os.environ.get("SEQUENCE_LOG_LEVEL", "INFO").upper())


def expensive_transform(x):
    # Simulate a costly step so laziness is visible
    print(f"  computing f({x}) ...")
    sleep(0.2)  # pretend this is expensive
    return x * x

print("\n--- Demo: laziness (no work until iterated) ---")
pipeline = (
    sequence(1, 10_000)
    .map(expensive_transform)   # expensive; watch when it runs
    .filter(lambda v: v % 2 == 0)
    .take(5)
)

print("Constructed pipeline. No output yet (nothing computed).")
print("\nIterating (should compute only what's needed for 5 items):")
t0 = perf_counter()
out = list(pipeline)  # forces just enough work to get 5 items
t1 = perf_counter()
print(f"Result: {out}")
print(f"Time: {t1 - t0:.2f}s\n")

print("--- Demo: bounding an infinite sequence ---")
naturals = sequence(0, math.inf)
print(f"Length of naturals: {naturals.length}")
first_odds = naturals.filter(lambda v: v % 2).take(5)
print(f"Length after filter + take(5): {first_odds.length}")
print(f"Values: {first_odds.to_list()}\n")

print("--- Demo: length pre-generation ---")
squares = sequence(1, 12).map(expensive_transform).filter(lambda v: v % 5 != 0)
print("Asking for the length computes every remaining value once:")
t0 = perf_counter()
print(f"Length: {squares.length}")
t1 = perf_counter()
print(f"First pass time: {t1 - t0:.2f}s\n")

print("Iterating afterwards reuses the buffered values (no recomputation):")
t0 = perf_counter()
print(f"Values: {squares.to_list()}")
t1 = perf_counter()
print(f"Second pass time: {t1 - t0:.4f}s\n")

print("--- Demo: reversal ---")
print(f"sequence(0, 10, 3).reverse(): {sequence(0, 10, 3).reverse().to_list()}")
print(f"enumerate().reverse(): {sequence(5, 0).enumerate().reverse().to_list()}\n")

print("--- Demo: clone and reset ---")
countdown = sequence(10, 0, -2)
print(f"First value: {next(countdown)}")
snapshot = countdown.clone()
print(f"Rest of the original: {countdown.to_list()}")
print(f"Clone resumes where the original was: {snapshot.to_list()}")
countdown.reset()
print(f"Original after reset: {countdown.to_list()}")
