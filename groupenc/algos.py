#!/usr/bin/env python3

"""Implementation of the scheme algorithms (Setup, KeyGen, Enc, Dec).

Notes
-----
Enc computes `c0 = r * G`, the shared value `S = r * y` and, for every slot
`i = 1..n`, an independent mask `mask_i = H(S, i) * G`, where `H` is
BLAKE2b-512 reduced mod the group order. Dec recovers `S = x * c0` and
subtracts the same masks. There is no integrity tag: decrypting with the
wrong key yields unrelated group elements rather than an error.
"""

import logging

from groupenc import utils
from groupenc.errors import DecodeError, EmptyMessage, EncryptionError, MalformedCiphertext
from groupenc.objects import Ciphertext, PrivateKey, PublicKey, SchemeParameters

logger = logging.getLogger(__name__)


def setup(group, rng=None):
    """Generate scheme parameters with a random generator.

    Parameters
    ----------
    group : Group
        working group
    rng : random.Random-like, optional
        randomness source

    Returns
    -------
    params : SchemeParameters
    """
    k = group.random_scalar(rng)
    params = SchemeParameters(group, group.mul(group.generator(), k))
    logger.debug("setup: random generator in %s", group.name)
    return params


def setup_from_domain(group, domain):
    """Derive scheme parameters deterministically from a domain label.

    Every party that uses the same `group` and `domain` gets the same
    parameters.
    """
    if isinstance(domain, str):
        domain = domain.encode("utf-8")
    k = utils.hash_to_scalar(group.order, domain)
    if k == 0:
        raise ValueError("domain hashes to the zero scalar")
    return SchemeParameters(group, group.mul(group.generator(), k))


def keygen(params, rng=None):
    """Generate a keypair.

    Returns
    -------
    sk : PrivateKey
        secret scalar `x`
    pk : PublicKey
        `x * G`
    """
    group = params.group
    while True:
        x = group.random_scalar(rng)
        y = group.mul(params.generator, x)
        # y is the identity only when x == 0 mod order
        if not group.is_identity(y):
            break
    logger.debug("keygen: new keypair in %s", group.name)
    return PrivateKey(params, x), PublicKey(params, y)


def derive_public_key(private_key):
    return private_key.public_key()


def generate_randomness(params, rng=None):
    """Fresh ephemeral scalar for a single encryption."""
    return params.group.random_scalar(rng)


def derive_masks(params, shared, n):
    """Masks `H(S, i) * G` for slots `i = 1..n`.

    Parameters
    ----------
    params : SchemeParameters
    shared : group element
        shared value `S`
    n : int
        number of slots

    Returns
    -------
    list of group elements
    """
    group = params.group
    s = group.encode(shared)
    masks = []
    for i in range(1, n + 1):
        h = utils.hash_to_scalar(group.order, s, utils.index_bytes(i), person=utils.MASK_PERSON)
        masks.append(group.mul(params.generator, h))
    return masks


def encrypt(public_key, plaintext, rng=None):
    """Encrypt a vector of group elements.

    Parameters
    ----------
    public_key : PublicKey
        recipient's public key
    plaintext : sequence of group elements
        message, at least one element
    rng : random.Random-like, optional
        randomness source

    Returns
    -------
    ct : Ciphertext
        `(c0, c1, ..., cn)`

    Raises
    ------
    EmptyMessage
        if `plaintext` is empty
    RandomnessFailure
        if `rng` fails
    """
    plaintext = list(plaintext)
    if not plaintext:
        raise EmptyMessage("cannot encrypt an empty plaintext")
    r = generate_randomness(public_key.params, rng)
    return encrypt_with_randomness(public_key, plaintext, r)


def encrypt_with_randomness(public_key, plaintext, r):
    """Deterministic part of `encrypt` for an explicit ephemeral scalar `r`.

    `r` must be fresh for every call; reusing it reuses the masks.
    """
    params = public_key.params
    group = params.group
    plaintext = list(plaintext)
    if not plaintext:
        raise EmptyMessage("cannot encrypt an empty plaintext")
    if not 1 <= r < group.order:
        raise ValueError("ephemeral scalar out of range")
    for i, m in enumerate(plaintext, 1):
        if not group.is_element(m):
            raise EncryptionError("plaintext element {} is not in {}".format(i, group.name))

    c0 = group.mul(params.generator, r)
    shared = group.mul(public_key.y, r)
    masks = derive_masks(params, shared, len(plaintext))
    components = [c0] + [group.add(m, mask) for m, mask in zip(plaintext, masks)]

    logger.debug("encrypt: %d elements in %s", len(plaintext), group.name)
    return Ciphertext(components)


def _check_ciphertext(group, ciphertext):
    if isinstance(ciphertext, (bytes, bytearray, memoryview)):
        ciphertext = Ciphertext.from_binary(group, ciphertext)
    elif not isinstance(ciphertext, Ciphertext):
        ciphertext = Ciphertext(ciphertext)

    # an honest ciphertext carries c0 and at least one masked slot
    if len(ciphertext) < 2:
        raise MalformedCiphertext("ciphertext has {} components, need at least 2".format(
            len(ciphertext)))
    for i, c in enumerate(ciphertext):
        try:
            group.validate(c)
        except DecodeError as e:
            raise MalformedCiphertext("component {} is invalid: {}".format(i, e)) from e
    if group.is_identity(ciphertext.c0):
        raise MalformedCiphertext("c0 is the identity")
    return ciphertext


def decrypt(private_key, ciphertext):
    """Decrypt a ciphertext.

    Parameters
    ----------
    private_key : PrivateKey
        recipient's secret key
    ciphertext : Ciphertext, sequence of group elements, or bytes
        ciphertext or its wire encoding

    Returns
    -------
    list of group elements
        recovered plaintext, one element shorter than the ciphertext

    Raises
    ------
    MalformedCiphertext
        if the ciphertext is too short or holds an invalid element

    Notes
    -----
    Only the wire encoding, through its slot count, detects a dropped `c0`.
    An in-memory ciphertext of three or more components that lost `c0`
    decrypts to unrelated elements without an error.
    """
    params = private_key.params
    group = params.group
    ciphertext = _check_ciphertext(group, ciphertext)

    shared = group.mul(ciphertext.c0, private_key.x)
    masks = derive_masks(params, shared, len(ciphertext) - 1)
    plaintext = [group.sub(c, mask) for c, mask in zip(ciphertext.masked, masks)]

    logger.debug("decrypt: %d elements in %s", len(plaintext), group.name)
    return plaintext
