#!/usr/bin/env python
from groupenc import algos
from groupenc.groups import get_group, GROUPS
from groupenc.utils import DeterministicRandom
import time
import argparse
import numpy as np
import csv

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="run Setup/KeyGen/Enc/Dec benchmarks")
    parser.add_argument('-n','--lengths',
        type=int,
        nargs='+',
        required=False,
        default=[1, 2, 32, 100],
        dest='lengths',
        help='plaintext lengths (number of group elements) to benchmark')
    parser.add_argument('-i','--iters',
        type=int,
        required=False,
        default=10,
        dest='iters',
        help='iterations per plaintext length')
    parser.add_argument('-g','--group',
        choices=sorted(GROUPS),
        required=False,
        default='G1',
        dest='group',
        help='group to instantiate the scheme over')
    parser.add_argument('-s','--seed',
        type=int,
        required=False,
        default=None,
        dest='seed',
        help='seed a deterministic randomness source (default: system randomness)')
    parser.add_argument('-o','--output',
        required=False,
        default=None,
        dest='output',
        help='csv file for per-iteration timings (default: bench_<group>.csv)')
    args = parser.parse_args()

    group = get_group(args.group)
    rng = DeterministicRandom(args.seed) if args.seed is not None else None

    ## Setup ###
    setup_time = time.time()
    params = algos.setup(group, rng)
    setup_time = time.time()-setup_time
    print("Setup (s):\t", setup_time)

    keygen_time = time.time()
    sk, pk = algos.keygen(params, rng)
    keygen_time = time.time()-keygen_time
    print("KeyGen (s):\t", keygen_time)
    print("--------------------------")

    filename = args.output if args.output else 'bench_{}.csv'.format(group.name)
    f = open(filename, 'w')
    writer = csv.writer(f)
    writer.writerow(['n', 'Enc', 'Dec', 'ct_bytes'])

    time_avgs = {}
    for n in args.lengths:
        enc_times = np.zeros(args.iters)
        dec_times = np.zeros(args.iters)
        for i in range(args.iters):
            m = [group.random_element(rng) for _ in range(n)]

            start = time.time()
            ct = algos.encrypt(pk, m, rng)
            enc_times[i] = time.time()-start

            start = time.time()
            m_prime = algos.decrypt(sk, ct)
            dec_times[i] = time.time()-start

            # ensure correctness
            assert(m == m_prime)

            writer.writerow([n, enc_times[i], dec_times[i], ct.get_size(group)])
        time_avgs[n] = (np.mean(enc_times), np.std(enc_times), np.mean(dec_times), np.std(dec_times))
        print(".", end="", flush=True)
    f.close()

    print("\n\nAverage Times (s) in {} (avg of {})".format(group.name, args.iters))
    print("--------------------------")
    print("n\tEnc\t\t\tDec")
    for n, (enc_mean, enc_std, dec_mean, dec_std) in time_avgs.items():
        print("{}\t{:.6f} +- {:.6f}\t{:.6f} +- {:.6f}".format(n, enc_mean, enc_std, dec_mean, dec_std))
        print("\tper element:\t{:.6f}\t{:.6f}".format(enc_mean/n, dec_mean/n))
