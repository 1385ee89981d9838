#!/usr/bin/env python3
"""
Print the TLSA 3 1 1 record for a signing key pair.
Usage: python scripts/tlsa.py <hostname> <pubkey.pem> <privkey.pem> [port]
"""
import sys

from dyncert.engine import DynamicCertificates
from dyncert.crypto.fingerprint import tlsa_record
from dyncert.common.errors import DynCertError


def main(argv):
    if len(argv) < 4:
        print("Usage: tlsa.py <hostname> <pubkey.pem> <privkey.pem> [port]")
        return 1
    hostname, pub_file, priv_file = argv[1:4]
    port = int(argv[4]) if len(argv) > 4 else 443
    try:
        certs = DynamicCertificates(pub_key_file=pub_file, priv_key_file=priv_file)
    except DynCertError as e:
        print(f"❌ {e}")
        return 1
    print(tlsa_record(hostname, certs.get_spki_fingerprint(), port=port))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
