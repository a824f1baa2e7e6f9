# agrichain/domain/errors.py


class AgriChainError(Exception):
    """Bazowy blad warstwy danych, zawsze z czytelnym komunikatem."""


class NotFoundError(AgriChainError):
    pass


class TransientNetworkError(AgriChainError):
    """Symulowane zerwanie polaczenia, klient moze ponowic recznie."""

    def __init__(self, message: str = "Network error: Unable to connect to server"):
        super().__init__(message)


class StorageWriteError(AgriChainError):
    """Magazyn odrzucil zapis (np. przekroczony limit)."""
