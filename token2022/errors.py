"""Errors raised while decoding, encoding or interpreting token accounts."""


class TokenError(ValueError):
    """Base class for every error raised by this package."""


class BufferTooShortError(TokenError):
    """Fewer bytes remain than the field being read requires."""


class InvalidAccountSizeError(TokenError):
    """Account data length cannot belong to the requested account kind."""


class TruncatedExtensionDataError(TokenError):
    """A TLV record declares more value bytes than the buffer holds."""


class AccountNotInitializedError(TokenError):
    """The account type tag says the account carries no typed content."""


class InvalidAccountTypeError(TokenError):
    """The account type tag names a different account kind."""


class InvalidAccountDataError(TokenError):
    """The bytes are structurally present but do not describe a valid value."""


class InvalidOptionDiscriminantError(TokenError):
    """A C-option tag is neither 0 nor 1."""


class MissingExtensionFieldError(TokenError):
    """An extension was asked to encode itself with a required field unset."""


class InvalidTimespanError(TokenError):
    """An end timestamp precedes its start timestamp."""


class InvalidUiAmountError(TokenError):
    """A UI amount does not map back to a finite raw amount."""


class AccountNotFoundError(TokenError):
    """The RPC node returned no account at the requested address."""


class InvalidAccountOwnerError(TokenError):
    """The fetched account is not owned by the expected token program."""
