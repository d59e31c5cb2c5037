from humint.session.session import CryptoSession as CryptoSession

__all__ = ["CryptoSession"]
