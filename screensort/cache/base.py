from abc import ABC, abstractmethod


class BaseKeyValueStore(ABC):
    """Durable key-value storage for JSON-compatible values."""

    @abstractmethod
    def get(self, key: str) -> object | None:
        """Return the stored value, or None if the key is absent.

        Raises:
            CacheDecodeError: if the stored value cannot be decoded.
            CacheError: on any other backend failure.
        """
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: object) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, key: str) -> None:
        raise NotImplementedError
