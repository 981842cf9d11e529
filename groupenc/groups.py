"""Prime-order groups the encryption scheme can be instantiated over.

The scheme only talks to a group through the `Group` interface, written
additively: `add`, `neg` and `mul` (scalar multiplication). The concrete
groups below wrap the BLS12-381 source groups of petrelic, which are written
multiplicatively (`*` is the group operation and `**` the scalar
multiplication).

Dependencies
------------
* petrelic
"""

from abc import ABC, abstractmethod

from petrelic.bn import Bn
from petrelic.multiplicative.pairing import G1, G2, G1Element, G2Element

from groupenc import utils
from groupenc.errors import DecodeError


class Group(ABC):
    """Abstract prime-order group.

    Attributes
    ----------
    name : str
        short identifier of the group
    order : int
        prime order of the group (size of the scalar field)
    element_size : int
        width in bytes of the canonical encoding of an element
    """

    @property
    @abstractmethod
    def name(self):
        """Short identifier of the group."""

    @property
    @abstractmethod
    def order(self):
        """Prime order of the group."""

    @property
    @abstractmethod
    def element_size(self):
        """Width in bytes of `encode` output."""

    @abstractmethod
    def generator(self):
        """Fixed generator of the group."""

    @abstractmethod
    def identity(self):
        """Neutral element."""

    @abstractmethod
    def add(self, a, b):
        pass

    @abstractmethod
    def neg(self, a):
        pass

    @abstractmethod
    def mul(self, a, k):
        """Multiply element `a` by the integer scalar `k` (taken mod `order`)."""

    @abstractmethod
    def is_identity(self, a):
        pass

    @abstractmethod
    def is_element(self, a):
        """Whether `a` is a valid element of this group."""

    @abstractmethod
    def encode(self, a):
        """Canonical fixed-width encoding of `a`."""

    @abstractmethod
    def decode(self, data):
        """Inverse of `encode`, raising `DecodeError` on invalid bytes."""

    def sub(self, a, b):
        return self.add(a, self.neg(b))

    def eq(self, a, b):
        return self.encode(a) == self.encode(b)

    @abstractmethod
    def random_scalar(self, rng=None):
        """Sample a uniform scalar in `[1, order-1]`.

        Parameters
        ----------
        rng : random.Random-like, optional
            randomness source (see `utils.random_bytes`); the group's own
            source if `None`
        """

    def random_element(self, rng=None):
        """Sample a uniformly random element (see `random_scalar` for `rng`)."""
        return self.mul(self.generator(), self.random_scalar(rng))

    def validate(self, a):
        """Raise `DecodeError` unless `a` is an element of this group."""
        if not self.is_element(a):
            raise DecodeError("value is not an element of {}".format(self.name))
        return a

    def __eq__(self, other):
        return type(self) is type(other)

    def __hash__(self):
        return hash(type(self))

    def __repr__(self):
        return "{}()".format(type(self).__name__)


class _PetrelicGroup(Group):
    """Group backed by one of petrelic's BLS12-381 source groups.

    Subclasses set `_group` (the petrelic group class) and `_element`
    (its element class).
    """

    _group = None
    _element = None

    def __init__(self):
        self._order = int(self._group.order())
        self._generator = self._group.generator()
        self._size = len(self._element.to_binary(self._generator))
        # leading byte of a compressed point: one value per sign of y
        self._prefixes = frozenset([
            self._element.to_binary(self._generator)[0],
            self._element.to_binary(self.neg(self._generator))[0],
        ])

    @property
    def order(self):
        return self._order

    @property
    def element_size(self):
        return self._size

    def generator(self):
        return self._generator

    def random_scalar(self, rng=None):
        if rng is not None:
            return utils.random_scalar(self._order, rng)
        k = 0
        while k == 0:
            k = int(self._group.order().random())
        return k

    def identity(self):
        return self._group.neutral_element()

    def add(self, a, b):
        return a * b

    def neg(self, a):
        return a ** Bn.from_num(self._order - 1)

    def mul(self, a, k):
        return a ** Bn.from_num(k % self._order)

    def is_identity(self, a):
        return a.is_neutral_element()

    def is_element(self, a):
        return isinstance(a, self._element) and (a.is_neutral_element() or a.is_valid())

    def encode(self, a):
        # RELIC writes the point at infinity in a single byte; pad it so
        # every element has the same width. An all-zero string is never a
        # valid compressed point.
        if a.is_neutral_element():
            return bytes(self._size)
        data = self._element.to_binary(a)
        assert len(data) == self._size
        return data

    def decode(self, data):
        data = bytes(data)
        if len(data) != self._size:
            raise DecodeError("{} element must be {} bytes, got {}".format(
                self.name, self._size, len(data)))
        if data == bytes(self._size):
            return self.identity()
        if data[0] not in self._prefixes:
            raise DecodeError("invalid point prefix for a {} element".format(self.name))
        try:
            a = self._element.from_binary(data)
        except Exception as e:
            raise DecodeError("bytes do not encode a {} element".format(self.name)) from e
        if not a.is_valid():
            raise DecodeError("point is not a valid {} element".format(self.name))
        if self._element.to_binary(a) != data:
            raise DecodeError("non-canonical encoding of a {} element".format(self.name))
        return a


class G1Group(_PetrelicGroup):
    """The BLS12-381 group G1 (compressed points)."""

    name = "G1"
    _group = G1
    _element = G1Element


class G2Group(_PetrelicGroup):
    """The BLS12-381 group G2 (compressed points)."""

    name = "G2"
    _group = G2
    _element = G2Element


GROUPS = {
    G1Group.name: G1Group,
    G2Group.name: G2Group,
}


def get_group(name):
    """Instantiate a supported group by name (`"G1"` or `"G2"`)."""
    try:
        return GROUPS[name]()
    except KeyError:
        raise ValueError("unknown group {!r}, expected one of {}".format(
            name, ", ".join(sorted(GROUPS)))) from None
