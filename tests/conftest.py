import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from dyncert.crypto.keys import load_key_pair


def _pems(key):
    public_pem = key.public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()
    private_pem = key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.TraditionalOpenSSL,
        serialization.NoEncryption(),
    ).decode()
    return public_pem, private_pem


@pytest.fixture(scope="session")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def other_rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def ec_key():
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def rsa_pems(rsa_key):
    return _pems(rsa_key)


@pytest.fixture(scope="session")
def other_rsa_pems(other_rsa_key):
    return _pems(other_rsa_key)


@pytest.fixture(scope="session")
def ec_pems(ec_key):
    return _pems(ec_key)


@pytest.fixture(scope="session")
def rsa_pair(rsa_pems):
    return load_key_pair(*rsa_pems)


@pytest.fixture(scope="session")
def ec_pair(ec_pems):
    return load_key_pair(*ec_pems)


@pytest.fixture
def key_files(tmp_path, rsa_pems):
    pub_path = tmp_path / "pub.pem"
    priv_path = tmp_path / "priv.pem"
    pub_path.write_text(rsa_pems[0], encoding="ascii")
    priv_path.write_text(rsa_pems[1], encoding="ascii")
    return str(pub_path), str(priv_path)
