class StoreError(Exception):
    """Base class for store failures"""


class StringAlreadyExistsError(StoreError):
    def __init__(self, value: str):
        super().__init__("String already exists in the system")
        self.value = value


class StringNotFoundError(StoreError):
    def __init__(self, value: str):
        super().__init__("String does not exist in the system")
        self.value = value


class StorageError(StoreError):
    """The backend itself failed (database error, bad stored data)"""
