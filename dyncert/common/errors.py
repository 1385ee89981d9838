"""Error taxonomy for certificate issuance."""


class DynCertError(ValueError):
    """Base class for every error raised by dyncert."""


# -------------------- CONSTRUCTION (fatal) -------------------- #

class KeyParseError(DynCertError):
    """PEM input is malformed or holds an unsupported key algorithm."""


class MissingKeyMaterialError(DynCertError):
    """Neither an inline PEM nor a readable file was supplied for a key."""


# -------------------- ISSUANCE (per call) -------------------- #

class InvalidHostnameError(DynCertError):
    """Hostname is empty or cannot be placed in a certificate."""


class SigningError(DynCertError):
    """The signature over the certificate could not be produced."""
