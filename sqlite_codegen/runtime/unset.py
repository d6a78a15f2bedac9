"""Marker for fields that were never assigned in a partial record."""


class Unset:
    """Type of :data:`UNSET`. There is only ever one instance."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"

    def __reduce__(self):
        return (Unset, ())


UNSET = Unset()
