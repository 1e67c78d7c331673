"""
Modular exponentiation over unsigned 64-bit operands.
"""

from cipher_chat.common.exceptions import ParameterError
from cipher_chat.common.protocol import U64_MAX


def _check_u64(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ParameterError(f"{name} must be an integer, got {type(value).__name__}")
    if not 0 <= value <= U64_MAX:
        raise ParameterError(f"{name} outside unsigned 64-bit range: {value}")


def pow_mod(base: int, exponent: int, modulus: int) -> int:
    """
    Compute (base ** exponent) mod modulus by square-and-multiply.

    Python integers do not overflow, so the products of two 64-bit values
    are kept exactly before reduction.

    Args:
        base: Base, 0 <= base < 2**64
        exponent: Exponent, 0 <= exponent < 2**64
        modulus: Modulus, 0 < modulus < 2**64

    Returns:
        Value in [0, modulus)

    Raises:
        ParameterError: If modulus is zero or an operand is out of range
    """
    _check_u64("base", base)
    _check_u64("exponent", exponent)
    _check_u64("modulus", modulus)
    if modulus == 0:
        raise ParameterError("modulus must be non-zero")

    result = 1 % modulus
    base %= modulus
    while exponent > 0:
        if exponent & 1:
            result = (result * base) % modulus
        base = (base * base) % modulus
        exponent //= 2

    return result
