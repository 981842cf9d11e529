#!/usr/bin/env python3

"""Objects to represent scheme parameters, keys and ciphertexts.
"""

import struct

from groupenc.errors import DecodeError, MalformedCiphertext

# ciphertext header: number of masked slots n, big-endian
_HEADER = struct.Struct(">I")
HEADER_SIZE = _HEADER.size


def _scalar_size(order):
    return (order.bit_length() + 7) // 8


class SchemeParameters:
    """Public parameters shared by every keypair of a deployment.

    Attributes
    ----------
    group : Group
        working group
    generator : group element
        generator `G` used for keys, commitments and masks
    """

    __slots__ = ("group", "generator")

    def __init__(self, group, generator):
        group.validate(generator)
        if group.is_identity(generator):
            raise ValueError("the generator must not be the identity")
        object.__setattr__(self, "group", group)
        object.__setattr__(self, "generator", generator)

    def __setattr__(self, name, value):
        raise AttributeError("SchemeParameters are immutable")

    def __eq__(self, other):
        if not isinstance(other, SchemeParameters):
            return NotImplemented
        return self.group == other.group and self.group.eq(self.generator, other.generator)

    def __hash__(self):
        return hash((self.group, self.to_binary()))

    def __repr__(self):
        return "SchemeParameters(group={}, generator={})".format(
            self.group.name, self.to_binary().hex())

    def to_binary(self):
        """Encoding of the generator."""
        return self.group.encode(self.generator)

    @classmethod
    def from_binary(cls, group, data):
        generator = group.decode(data)
        if group.is_identity(generator):
            raise DecodeError("the generator must not be the identity")
        return cls(group, generator)


class PrivateKey:
    """Secret scalar `x` in `[1, order-1]`.

    The scalar is deliberately left out of `repr`.
    """

    __slots__ = ("params", "x")

    def __init__(self, params, x):
        if not 1 <= x < params.group.order:
            raise ValueError("private key scalar out of range")
        object.__setattr__(self, "params", params)
        object.__setattr__(self, "x", x)

    def __setattr__(self, name, value):
        raise AttributeError("PrivateKey is immutable")

    def __eq__(self, other):
        if not isinstance(other, PrivateKey):
            return NotImplemented
        return self.params == other.params and self.x == other.x

    def __hash__(self):
        return hash((self.params, self.x))

    def __repr__(self):
        return "PrivateKey(group={}, x=<redacted>)".format(self.params.group.name)

    def public_key(self):
        group = self.params.group
        return PublicKey(self.params, group.mul(self.params.generator, self.x))

    def to_binary(self):
        """Fixed-width big-endian encoding of `x`. Keep it off untrusted channels."""
        return self.x.to_bytes(_scalar_size(self.params.group.order), "big")

    @classmethod
    def from_binary(cls, params, data):
        if len(data) != _scalar_size(params.group.order):
            raise DecodeError("private key must be {} bytes".format(
                _scalar_size(params.group.order)))
        x = int.from_bytes(data, "big")
        if not 1 <= x < params.group.order:
            raise DecodeError("private key scalar out of range")
        return cls(params, x)


class PublicKey:
    """Public key `y = x * G`."""

    __slots__ = ("params", "y")

    def __init__(self, params, y):
        params.group.validate(y)
        if params.group.is_identity(y):
            raise ValueError("the public key must not be the identity")
        object.__setattr__(self, "params", params)
        object.__setattr__(self, "y", y)

    def __setattr__(self, name, value):
        raise AttributeError("PublicKey is immutable")

    def __eq__(self, other):
        if not isinstance(other, PublicKey):
            return NotImplemented
        return self.params == other.params and self.params.group.eq(self.y, other.y)

    def __hash__(self):
        return hash((self.params, self.to_binary()))

    def __repr__(self):
        return "PublicKey(group={}, y={})".format(self.params.group.name, self.to_binary().hex())

    def to_binary(self):
        return self.params.group.encode(self.y)

    @classmethod
    def from_binary(cls, params, data):
        y = params.group.decode(data)
        if params.group.is_identity(y):
            raise DecodeError("the public key must not be the identity")
        return cls(params, y)


class Ciphertext:
    """Ciphertext tuple `(c0, c1, ..., cn)`.

    Parameters
    ----------
    components : sequence of group elements
        `c0` (commitment to the encryption randomness) followed by the
        masked plaintext elements

    Notes
    -----
    Wire format: a 4-byte big-endian `n` followed by `n + 1` canonical
    element encodings. Any further framing belongs to the transport.
    """

    __slots__ = ("components",)

    def __init__(self, components):
        object.__setattr__(self, "components", tuple(components))

    def __setattr__(self, name, value):
        raise AttributeError("Ciphertext is immutable")

    @property
    def c0(self):
        return self.components[0]

    @property
    def masked(self):
        return self.components[1:]

    def __len__(self):
        return len(self.components)

    def __iter__(self):
        return iter(self.components)

    def __getitem__(self, i):
        return self.components[i]

    def __eq__(self, other):
        if not isinstance(other, Ciphertext):
            return NotImplemented
        return len(self) == len(other) and all(a == b for a, b in zip(self, other))

    __hash__ = None

    def __repr__(self):
        return "Ciphertext(<{} components>)".format(len(self))

    def get_size(self, group):
        """Calculate the size (in bytes) of the encoded ciphertext."""
        return _HEADER.size + len(self) * group.element_size

    def to_binary(self, group):
        if len(self) < 1:
            raise ValueError("cannot encode a ciphertext without c0")
        out = [_HEADER.pack(len(self) - 1)]
        out += [group.encode(c) for c in self]
        return b"".join(out)

    @classmethod
    def from_binary(cls, group, data):
        """Decode and validate a ciphertext.

        Raises
        ------
        MalformedCiphertext
            on a bad header, a length mismatch, or an invalid element
        """
        data = bytes(data)
        if len(data) < _HEADER.size:
            raise MalformedCiphertext("ciphertext is shorter than its header")
        (n,) = _HEADER.unpack_from(data)
        size = group.element_size
        if len(data) != _HEADER.size + (n + 1) * size:
            raise MalformedCiphertext("ciphertext length does not match its {} slots".format(n))
        components = []
        for i in range(n + 1):
            start = _HEADER.size + i * size
            try:
                components.append(group.decode(data[start:start + size]))
            except DecodeError as e:
                raise MalformedCiphertext("component {} is invalid: {}".format(i, e)) from e
        return cls(components)
