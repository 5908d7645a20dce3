"""Shared type definitions for pool models.

Account and asset identifiers are Ethereum-style addresses compared
case-insensitively. Amounts cross the HTTP boundary as decimal strings so
values above 2^53 survive JSON.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from simpleswap.safe_int import UINT256_MAX


def validate_uint256(value: Any) -> str:
    """Validate that a value is a uint256, returning it as a decimal string.

    Raises:
        ValueError: If value is not a non-negative integer within uint256 range
    """
    if isinstance(value, bool):
        raise ValueError("Uint256 must be string or int, got bool")
    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value)
        except ValueError as err:
            raise ValueError(f"Uint256 must be a decimal integer string: '{value}'") from err
    else:
        raise ValueError(f"Uint256 must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"Uint256 cannot be negative: {value}")
    if int_value > UINT256_MAX:
        raise ValueError(f"Uint256 overflow: {value} > 2^256-1")
    return str(int_value)


# 256-bit unsigned integer as decimal string (validated)
Uint256 = Annotated[
    str,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer as decimal string"),
]

# Account or asset identifier
Address = Annotated[str, Field(min_length=1)]


def normalize_address(address: str) -> str:
    """Normalize an identifier to lowercase with a 0x prefix."""
    addr = address.strip().lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr
    return addr


def is_zero_address(address: str) -> bool:
    """Check if an identifier is the null account.

    Short spellings such as "0x0" or "0" name the same account as the padded
    40-digit form.
    """
    return normalize_address(address)[2:].lstrip("0") == ""


def is_valid_account(address: object) -> bool:
    """Check if a value can receive assets or shares.

    Any non-empty string other than the zero address qualifies.
    """
    if not isinstance(address, str) or not address.strip():
        return False
    return not is_zero_address(address)

