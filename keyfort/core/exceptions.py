class CredentialError(Exception):
    pass


class EncryptionFailure(CredentialError):
    pass


class DecryptionFailure(CredentialError):
    def __init__(self, message: str = "Incorrect passphrase or corrupted ciphertext"):
        super().__init__(message)


class InvalidPolicy(CredentialError, ValueError):
    pass
