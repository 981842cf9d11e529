"""Public-key encryption of vectors of group elements over a prime-order
elliptic-curve group.

Notes
-----
A plaintext is an ordered vector `(m_1, ..., m_n)` of group elements. It is
encrypted under a public key `y = x * G` into `(c0, c1, ..., cn)` with
`c0 = r * G` and `c_i = m_i + H(r * y, i) * G`; the holder of `x` recomputes
`r * y = x * c0` and removes the masks. Ciphertexts of the same plaintext
under fresh randomness are unlinkable under the DDH assumption. There is no
integrity tag, so decrypting under the wrong key returns unrelated elements
instead of an error.

The scheme is generic over `groups.Group`; BLS12-381 G1 and G2 (through
petrelic) are provided.

Examples
--------
Set up parameters over G1:

>>> from groupenc import algos
>>> from groupenc.groups import G1Group
>>> group = G1Group()
>>> params = algos.setup(group)

Generate a keypair:

>>> sk, pk = algos.keygen(params)

Encrypt three random elements and decrypt them again:

>>> m = [group.random_element() for _ in range(3)]
>>> ct = algos.encrypt(pk, m)
>>> algos.decrypt(sk, ct) == m
True

Ciphertexts travel as bytes:

>>> data = ct.to_binary(group)
>>> algos.decrypt(sk, data) == m
True
"""

from groupenc.algos import (
    decrypt,
    derive_public_key,
    encrypt,
    encrypt_with_randomness,
    generate_randomness,
    keygen,
    setup,
    setup_from_domain,
)
from groupenc.errors import (
    DecodeError,
    DecryptionError,
    EmptyMessage,
    EncryptionError,
    GroupEncryptionError,
    MalformedCiphertext,
    RandomnessFailure,
)
from groupenc.groups import G1Group, G2Group, Group, get_group
from groupenc.objects import Ciphertext, PrivateKey, PublicKey, SchemeParameters
from groupenc.utils import DeterministicRandom

__version__ = "1.0"
