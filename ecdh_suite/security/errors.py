from __future__ import annotations


class ECDHError(Exception):
    """
    Base class for every failure surfaced by the key-agreement pipeline.
    `kind` is the stable token that ends up in the response envelope.
    """
    kind = "ECDHError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


class EmptyPayloadError(ECDHError):
    kind = "EmptyPayload"

    def __init__(self, message: str = "request data is empty") -> None:
        super().__init__(message)


class MalformedRequestError(ECDHError):
    kind = "MalformedRequest"


class EmptyCurveNameError(ECDHError):
    kind = "EmptyCurveName"

    def __init__(self, message: str = "curve name is empty") -> None:
        super().__init__(message)


class UnsupportedCurveError(ECDHError):
    kind = "UnsupportedCurve"

    def __init__(self, name: str) -> None:
        super().__init__(f"unsupported curve name: {name}")
        self.name = name


class InvalidPublicKeyError(ECDHError):
    kind = "InvalidPublicKey"


class InvalidPrivateKeyError(ECDHError):
    kind = "InvalidPrivateKey"


class DerivationFailedError(ECDHError):
    kind = "DerivationFailed"


class RandomSourceFailureError(ECDHError):
    kind = "RandomSourceFailure"
