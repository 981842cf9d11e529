#!/usr/bin/env python
import time
from groupenc import algos
from groupenc.groups import G1Group, G2Group

if __name__ == "__main__":
    groups = [G1Group(), G2Group()]
    iters = 100
    results = {}

    print("averaging over {} iterations".format(iters), end="", flush=True)
    for group in groups:
        params = algos.setup(group)
        times = {
            "add": 0.0,
            "neg": 0.0,
            "scalar mul": 0.0,
            "encode": 0.0,
            "decode": 0.0,
            "mask": 0.0,
        }
        for i in range(iters):
            # random group elements and scalar
            a = group.random_element()
            b = group.random_element()
            k = group.random_scalar()

            start = time.time()
            group.add(a, b)
            times["add"] += time.time()-start

            start = time.time()
            group.neg(a)
            times["neg"] += time.time()-start

            start = time.time()
            group.mul(a, k)
            times["scalar mul"] += time.time()-start

            # --- serialization ---
            start = time.time()
            a_bytes = group.encode(a)
            times["encode"] += time.time()-start

            start = time.time()
            group.decode(a_bytes)
            times["decode"] += time.time()-start

            # one slot of mask derivation (hash to scalar + scalar mul)
            start = time.time()
            algos.derive_masks(params, a, 1)
            times["mask"] += time.time()-start

            print(i if i>0 and i%10==0 else ".", end="", flush=True)
        results[group.name] = times

    print("\n")
    for name, times in results.items():
        for op, total in times.items():
            print("{} in {}\t{}".format(op, name, total / iters))
        print()

    # sizes
    for group in groups:
        print("{} bytes:\t{}".format(group.name, group.element_size))
