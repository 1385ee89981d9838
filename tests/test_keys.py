import threading

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ed25519, rsa

from dyncert.common.errors import KeyParseError, MissingKeyMaterialError
from dyncert.common.protocol import KeyMaterial
from dyncert.crypto.keys import KeyPairStore, load_key_pair, resolve_key_material


def test_load_rsa_pair(rsa_pems, rsa_key):
    pair = load_key_pair(*rsa_pems)
    assert isinstance(pair.public_key, rsa.RSAPublicKey)
    assert pair.public_key.public_numbers() == rsa_key.public_key().public_numbers()


def test_load_accepts_bytes(ec_pems):
    pair = load_key_pair(ec_pems[0].encode(), ec_pems[1].encode())
    assert pair.public_key.curve.name == "secp256r1"


def test_garbage_public_key(rsa_pems):
    with pytest.raises(KeyParseError):
        load_key_pair("-----BEGIN PUBLIC KEY-----\nnope\n-----END PUBLIC KEY-----\n", rsa_pems[1])


def test_garbage_private_key(rsa_pems):
    with pytest.raises(KeyParseError):
        load_key_pair(rsa_pems[0], "not a key")


def test_encrypted_private_key_rejected(rsa_key, rsa_pems):
    encrypted = rsa_key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.BestAvailableEncryption(b"secret"),
    )
    with pytest.raises(KeyParseError):
        load_key_pair(rsa_pems[0], encrypted)


def test_unsupported_algorithm_rejected():
    key = ed25519.Ed25519PrivateKey.generate()
    public_pem = key.public_key().public_bytes(
        serialization.Encoding.PEM, serialization.PublicFormat.SubjectPublicKeyInfo)
    private_pem = key.private_bytes(
        serialization.Encoding.PEM, serialization.PrivateFormat.PKCS8, serialization.NoEncryption())
    with pytest.raises(KeyParseError, match="Unsupported"):
        load_key_pair(public_pem, private_pem)


def test_parse_error_is_value_error(rsa_pems):
    with pytest.raises(ValueError):
        load_key_pair(rsa_pems[0], "")


# -------------------- KEY MATERIAL -------------------- #

def test_inline_material_wins(key_files, other_rsa_pems):
    material = KeyMaterial(pub_key=other_rsa_pems[0], priv_key=other_rsa_pems[1],
                           pub_key_file=key_files[0], priv_key_file=key_files[1])
    assert resolve_key_material(material) == other_rsa_pems


def test_material_from_files(key_files, rsa_pems):
    material = KeyMaterial(pub_key_file=key_files[0], priv_key_file=key_files[1])
    assert resolve_key_material(material) == rsa_pems


def test_mixed_sources(key_files, rsa_pems):
    material = KeyMaterial(pub_key=rsa_pems[0], priv_key_file=key_files[1])
    assert resolve_key_material(material) == rsa_pems


def test_no_material():
    with pytest.raises(MissingKeyMaterialError):
        resolve_key_material(KeyMaterial())


def test_missing_private_only(rsa_pems):
    with pytest.raises(MissingKeyMaterialError, match="private"):
        resolve_key_material(KeyMaterial(pub_key=rsa_pems[0], priv_key=""))


def test_unreadable_file(tmp_path, rsa_pems):
    material = KeyMaterial(pub_key=rsa_pems[0], priv_key_file=str(tmp_path / "absent.pem"))
    with pytest.raises(MissingKeyMaterialError, match="absent.pem"):
        resolve_key_material(material)


# -------------------- STORE -------------------- #

def test_store_replace_bumps_generation(rsa_pair, ec_pair):
    store = KeyPairStore(rsa_pair)
    assert store.snapshot() == (0, rsa_pair)
    store.replace(ec_pair)
    generation, pair = store.snapshot()
    assert generation == 1
    assert pair is ec_pair
    assert store.key_pair is ec_pair


def test_store_concurrent_replace(rsa_pair, ec_pair):
    store = KeyPairStore(rsa_pair)
    threads = [threading.Thread(target=store.replace, args=(p,)) for p in [ec_pair, rsa_pair] * 10]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert store.generation == 20
    assert store.key_pair in (rsa_pair, ec_pair)
