import pytest

from vrfduel.errors import InvalidProof, MalformedInput
from vrfduel.types.core import VRFOutput
from vrfduel.utils.hash import blake2_256
from vrfduel.vrf import (PlayerIdentity, evaluate, output_from_proof, verify,
                         verify_output, verify_signature)

SEED = (3).to_bytes(8, "little")


def test_evaluate_is_deterministic(identity_a):
    o1 = evaluate(identity_a, SEED)
    o2 = evaluate(identity_a, SEED)
    assert o1 == o2
    assert len(o1.proof) == 64
    assert o1.raw == blake2_256(o1.proof)[0]
    assert output_from_proof(o1.proof) == o1.raw


def test_same_key_seed_gives_same_output_across_instances():
    seed = bytes.fromhex("03" * 32)
    assert evaluate(PlayerIdentity.from_seed(seed), SEED) == evaluate(
        PlayerIdentity.from_seed(seed), SEED
    )


def test_proof_verifies_with_own_key_only(identity_a, identity_b):
    oa = evaluate(identity_a, SEED)
    ob = evaluate(identity_b, SEED)
    assert verify(oa.proof, SEED, identity_a.public_key)
    assert verify(ob.proof, SEED, identity_b.public_key)
    assert not verify(oa.proof, SEED, identity_b.public_key)
    assert not verify(ob.proof, SEED, identity_a.public_key)


def test_proof_is_bound_to_seed(identity_a):
    oa = evaluate(identity_a, SEED)
    other = (4).to_bytes(8, "little")
    assert not verify(oa.proof, other, identity_a.public_key)


def test_verify_output_accepts_honest_output(identity_a):
    oa = evaluate(identity_a, SEED)
    assert verify_output(oa, SEED, identity_a.public_key, party="a") is oa


def test_verify_output_rejects_forged_signature(identity_a):
    forged = VRFOutput(proof=bytes(64), raw=output_from_proof(bytes(64)))
    with pytest.raises(InvalidProof) as ei:
        verify_output(forged, SEED, identity_a.public_key, party="a")
    assert ei.value.reason == "bad-signature"
    assert ei.value.party == "a"


def test_verify_output_rejects_announced_raw_mismatch(identity_b):
    ob = evaluate(identity_b, SEED)
    lied = VRFOutput(proof=ob.proof, raw=(ob.raw + 1) % 256)
    with pytest.raises(InvalidProof) as ei:
        verify_output(lied, SEED, identity_b.public_key, party="b")
    assert ei.value.reason == "output-mismatch"


@pytest.mark.parametrize("seed", [b"", b"\x00" * 7, b"\x00" * 9])
def test_evaluate_rejects_wrong_seed_width(identity_a, seed):
    with pytest.raises(MalformedInput):
        evaluate(identity_a, seed)


def test_short_signature_is_rejected_not_raised(identity_a):
    assert verify_signature(identity_a.public_key, SEED, b"\x00" * 10) is False


def test_malformed_public_key_raises(identity_a):
    oa = evaluate(identity_a, SEED)
    with pytest.raises(MalformedInput):
        verify(oa.proof, SEED, b"\x00" * 31)


def test_identity_from_seed_requires_32_bytes():
    with pytest.raises(MalformedInput):
        PlayerIdentity.from_seed(b"\x01" * 31)


def test_public_info_has_no_private_material(identity_a):
    info = identity_a.public_info()
    assert info == {"alg": "ed25519", "pubkey": identity_a.public_key.hex()}
    assert "_key" not in repr(identity_a)


def test_generated_identities_differ():
    assert PlayerIdentity.generate().public_key != PlayerIdentity.generate().public_key
