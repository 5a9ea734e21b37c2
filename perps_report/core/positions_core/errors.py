"""Errors raised while turning raw accounts into positions."""


class AccountDecodeError(ValueError):
    """Raised when account bytes do not match the expected layout."""

    def __init__(self, kind: str, message: str) -> None:
        super().__init__(f"[{kind}] {message}")
        self.kind = kind
