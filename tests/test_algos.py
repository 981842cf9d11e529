import pytest

from groupenc import algos
from groupenc.errors import EmptyMessage, EncryptionError, MalformedCiphertext, RandomnessFailure
from groupenc.groups import G1Group, G2Group
from groupenc.objects import HEADER_SIZE, Ciphertext, PublicKey
from groupenc.utils import DeterministicRandom

from tests.conftest import SEED
from tests.helpers import CountingRandom, FailingRandom, ShortRandom, random_plaintext


@pytest.mark.parametrize("n", [1, 2, 32, 100])
def test_round_trip(group, params, keypair, rng, n):
    sk, pk = keypair
    m = random_plaintext(group, n, rng)

    ct = algos.encrypt(pk, m, rng)

    assert len(ct) == n + 1
    assert algos.decrypt(sk, ct) == m


def test_round_trip_system_randomness(group):
    params = algos.setup(group)
    sk, pk = algos.keygen(params)
    m = random_plaintext(group, 4)
    assert algos.decrypt(sk, algos.encrypt(pk, m)) == m


def test_round_trip_through_wire_bytes(group, keypair, rng):
    sk, pk = keypair
    m = random_plaintext(group, 5, rng)
    data = algos.encrypt(pk, m, rng).to_binary(group)
    assert algos.decrypt(sk, data) == m


def test_round_trip_for_explicit_randomness(group, params, keypair, rng):
    sk, pk = keypair
    m = random_plaintext(group, 3, rng)
    for r in [1, 2, group.order - 1, algos.generate_randomness(params, rng)]:
        ct = algos.encrypt_with_randomness(pk, m, r)
        assert algos.decrypt(sk, ct) == m


def test_identity_plaintext_element(group, keypair, rng):
    sk, pk = keypair
    m = [group.identity(), group.random_element(rng)]
    recovered = algos.decrypt(sk, algos.encrypt(pk, m, rng))
    assert group.is_identity(recovered[0])
    assert recovered == m


def test_seeded_scenario_is_bit_exact():
    group = G1Group()
    rng = DeterministicRandom(SEED)
    params = algos.setup(group, rng)
    sk, pk = algos.keygen(params, rng)
    m = random_plaintext(group, 32, rng)

    ct = algos.encrypt(pk, m, rng)
    recovered = algos.decrypt(sk, ct)

    assert [group.encode(e) for e in recovered] == [group.encode(e) for e in m]


def test_seeded_scenario_is_reproducible():
    def run():
        group = G2Group()
        rng = DeterministicRandom(SEED)
        params = algos.setup(group, rng)
        _, pk = algos.keygen(params, rng)
        m = random_plaintext(group, 8, rng)
        return algos.encrypt(pk, m, rng).to_binary(group)

    assert run() == run()


def test_ciphertexts_are_unlinkable(group, keypair, rng):
    _, pk = keypair
    m = random_plaintext(group, 4, rng)
    seen = set()
    for _ in range(20):
        first = algos.encrypt(pk, m, rng)
        second = algos.encrypt(pk, m, rng)
        for a, b in zip(first, second):
            assert group.encode(a) != group.encode(b)
        seen.add(group.encode(first.c0))
    assert len(seen) == 20


def test_masks_differ_across_slots(group, keypair, rng):
    # equal plaintext elements still land on distinct ciphertext slots
    _, pk = keypair
    element = group.random_element(rng)
    ct = algos.encrypt(pk, [element] * 16, rng)
    encoded = {group.encode(c) for c in ct.masked}
    assert len(encoded) == 16


def test_wrong_key_does_not_recover_plaintext(group, params, keypair, rng):
    _, pk = keypair
    m = random_plaintext(group, 8, rng)
    ct = algos.encrypt(pk, m, rng)
    for _ in range(5):
        other_sk, _ = algos.keygen(params, rng)
        recovered = algos.decrypt(other_sk, ct)
        assert len(recovered) == len(m)
        assert recovered != m
        assert all(group.encode(a) != group.encode(b) for a, b in zip(recovered, m))


def test_decrypt_is_deterministic(group, keypair, rng):
    sk, pk = keypair
    ct = algos.encrypt(pk, random_plaintext(group, 6, rng), rng)
    first = algos.decrypt(sk, ct)
    second = algos.decrypt(sk, ct)
    assert [group.encode(e) for e in first] == [group.encode(e) for e in second]


def test_empty_plaintext_is_rejected(keypair):
    _, pk = keypair
    rng = CountingRandom(SEED)
    with pytest.raises(EmptyMessage):
        algos.encrypt(pk, [], rng)
    assert rng.calls == 0


def test_empty_plaintext_checked_before_randomness(keypair):
    _, pk = keypair
    with pytest.raises(EmptyMessage):
        algos.encrypt(pk, [], FailingRandom())


def test_empty_plaintext_with_explicit_randomness(keypair):
    _, pk = keypair
    with pytest.raises(EmptyMessage):
        algos.encrypt_with_randomness(pk, [], 7)


@pytest.mark.parametrize("r", [0, -1])
def test_explicit_randomness_out_of_range(group, keypair, rng, r):
    _, pk = keypair
    with pytest.raises(ValueError):
        algos.encrypt_with_randomness(pk, random_plaintext(group, 1, rng), r)
    with pytest.raises(ValueError):
        algos.encrypt_with_randomness(pk, random_plaintext(group, 1, rng), group.order)


def test_foreign_plaintext_element_is_rejected(keypair, group):
    _, pk = keypair
    other = G2Group() if isinstance(group, G1Group) else G1Group()
    with pytest.raises(EncryptionError):
        algos.encrypt(pk, [other.generator()])
    with pytest.raises(EncryptionError):
        algos.encrypt(pk, [b"not an element"])


def test_randomness_failure_propagates(keypair, params, group):
    _, pk = keypair
    with pytest.raises(RandomnessFailure) as excinfo:
        algos.encrypt(pk, [group.generator()], FailingRandom())
    assert isinstance(excinfo.value.__cause__, OSError)

    with pytest.raises(RandomnessFailure):
        algos.keygen(params, FailingRandom())
    with pytest.raises(RandomnessFailure):
        algos.setup(group, FailingRandom())


def test_short_read_is_a_randomness_failure(keypair, group):
    _, pk = keypair
    with pytest.raises(RandomnessFailure):
        algos.encrypt(pk, [group.generator()], ShortRandom())


def test_ciphertext_without_c0_is_rejected(group, keypair, rng):
    sk, pk = keypair
    ct = algos.encrypt(pk, random_plaintext(group, 1, rng), rng)
    with pytest.raises(MalformedCiphertext):
        algos.decrypt(sk, Ciphertext(ct.masked))
    with pytest.raises(MalformedCiphertext):
        algos.decrypt(sk, Ciphertext([]))


def test_wire_ciphertext_without_c0_is_rejected(group, keypair, rng):
    sk, pk = keypair
    data = algos.encrypt(pk, random_plaintext(group, 32, rng), rng).to_binary(group)
    shortened = data[:HEADER_SIZE] + data[HEADER_SIZE + group.element_size:]
    with pytest.raises(MalformedCiphertext):
        algos.decrypt(sk, shortened)


@pytest.mark.parametrize("slot", [0, 1, 3])
def test_corrupted_element_is_rejected(group, keypair, rng, slot):
    sk, pk = keypair
    data = bytearray(algos.encrypt(pk, random_plaintext(group, 3, rng), rng).to_binary(group))
    start = HEADER_SIZE + slot * group.element_size
    data[start:start + group.element_size] = b"\xff" * group.element_size
    with pytest.raises(MalformedCiphertext):
        algos.decrypt(sk, bytes(data))


@pytest.mark.parametrize("slot", [0, 2])
def test_off_curve_element_is_rejected(group, keypair, rng, slot):
    sk, pk = keypair
    data = bytearray(algos.encrypt(pk, random_plaintext(group, 2, rng), rng).to_binary(group))
    start = HEADER_SIZE + slot * group.element_size
    prefix = data[start:start + 1]
    for _ in range(8):
        data[start:start + group.element_size] = prefix + rng.randbytes(group.element_size - 1)
        with pytest.raises(MalformedCiphertext):
            algos.decrypt(sk, bytes(data))


def test_removed_c0_is_only_detected_on_the_wire(group, keypair, rng):
    sk, pk = keypair
    m = random_plaintext(group, 3, rng)
    ct = algos.encrypt(pk, m, rng)

    data = ct.to_binary(group)
    shortened = data[:HEADER_SIZE] + data[HEADER_SIZE + group.element_size:]
    with pytest.raises(MalformedCiphertext):
        algos.decrypt(sk, shortened)

    # in memory, c1 takes the place of c0 and decryption yields garbage
    recovered = algos.decrypt(sk, Ciphertext(ct.masked))
    assert len(recovered) == 2
    assert recovered != m[1:]


def test_truncated_wire_ciphertext_is_rejected(group, keypair, rng):
    sk, pk = keypair
    data = algos.encrypt(pk, random_plaintext(group, 2, rng), rng).to_binary(group)
    for cut in [0, 2, HEADER_SIZE, len(data) - 1]:
        with pytest.raises(MalformedCiphertext):
            algos.decrypt(sk, data[:cut])


def test_foreign_component_is_rejected(group, keypair, rng):
    sk, pk = keypair
    other = G2Group() if isinstance(group, G1Group) else G1Group()
    ct = algos.encrypt(pk, random_plaintext(group, 2, rng), rng)
    bad = Ciphertext([ct.c0, other.generator(), ct[2]])
    with pytest.raises(MalformedCiphertext):
        algos.decrypt(sk, bad)
    with pytest.raises(MalformedCiphertext):
        algos.decrypt(sk, [ct.c0, 42])


def test_identity_c0_is_rejected(group, keypair, rng):
    sk, pk = keypair
    ct = algos.encrypt(pk, random_plaintext(group, 2, rng), rng)
    with pytest.raises(MalformedCiphertext):
        algos.decrypt(sk, Ciphertext([group.identity()] + list(ct.masked)))


def test_keygen_ranges(group, params, rng):
    for _ in range(10):
        sk, pk = algos.keygen(params, rng)
        assert 1 <= sk.x < group.order
        assert not group.is_identity(pk.y)
        assert algos.derive_public_key(sk) == pk


def test_setup_draws_independent_generators(group, rng):
    a = algos.setup(group, rng)
    b = algos.setup(group, rng)
    assert a != b


def test_setup_from_domain_is_deterministic(group):
    a = algos.setup_from_domain(group, "groupenc test deployment")
    b = algos.setup_from_domain(group, b"groupenc test deployment")
    c = algos.setup_from_domain(group, "another deployment")
    assert a == b
    assert a != c


def test_keys_are_bound_to_their_parameters(group, rng):
    # a key from one deployment is useless under another generator
    params_a = algos.setup(group, rng)
    params_b = algos.setup(group, rng)
    sk, pk = algos.keygen(params_a, rng)
    m = random_plaintext(group, 2, rng)
    foreign_pk = PublicKey(params_b, pk.y)
    assert algos.decrypt(sk, algos.encrypt(foreign_pk, m, rng)) != m
