"""Core exception types shared across layers."""


class CertificateChainError(Exception):
    """Raised when a signing certificate chain cannot be fetched or trusted."""


class SignatureMismatchError(Exception):
    """Raised when a request body does not match its signature."""


__all__ = [
    "CertificateChainError",
    "SignatureMismatchError",
]
