"""Request signing for the Valence API."""

from valencehelper.auth.signer import IdKeySigner, RequestSigner, sign

__all__ = [
    "IdKeySigner",
    "RequestSigner",
    "sign",
]
