#!/usr/bin/env python

"""Print the sizes of the scheme's objects.

Outputs:
- sizes of group elements and scalars for every supported group
- sizes of parameters, keys, and ciphertexts for a range of plaintext lengths
- largest plaintext that fits in one network message for each node type
"""

from groupenc import algos, environment
from groupenc.groups import GROUPS

def print_element_sizes(group):
    params = algos.setup(group)
    sk, pk = algos.keygen(params)
    print("{} element size:\t".format(group.name), group.element_size)
    print("params size:\t", len(params.to_binary()))
    print("SK size:\t", len(sk.to_binary()))
    print("PK size:\t", len(pk.to_binary()))
    return pk

def print_ciphertext_sizes(group, pk, lengths):
    for n in lengths:
        m = [group.random_element() for _ in range(n)]
        ct = algos.encrypt(pk, m)
        print("ct size (n = {}):\t".format(n), len(ct.to_binary(group)))

def print_message_limits(group):
    for name, env in [("client", environment.client()),
                      ("miner", environment.miner()),
                      ("sync", environment.sync_node())]:
        print("max plaintext ({}):\t".format(name), environment.max_plaintext_length(env, group))

if __name__ == "__main__":
    for name in sorted(GROUPS):
        group = GROUPS[name]()
        print("\n{}".format(name))
        pk = print_element_sizes(group)
        print_ciphertext_sizes(group, pk, [1, 2, 32, 100])
        print_message_limits(group)
