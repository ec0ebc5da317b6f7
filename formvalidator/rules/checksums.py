"""Check-digit algorithms.

Inputs are assumed to be already normalized (digits only, plus a trailing X
for ISBN-10); callers do the format gating.
"""
from __future__ import annotations


def luhn_valid(number: str) -> bool:
    """Luhn (mod 10): double every second digit from the right, fold values above 9."""
    total = 0
    for position, char in enumerate(reversed(number)):
        digit = int(char)
        if position % 2:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


def isbn10_valid(isbn: str) -> bool:
    """Weighted sum 1..10 must be a multiple of 11. X stands for 10 in the last position."""
    checksum = sum((i + 1) * int(isbn[i]) for i in range(9))
    checksum += 10 * (10 if isbn[9] == "X" else int(isbn[9]))
    return checksum % 11 == 0


def isbn13_check_digit(digits: str) -> int:
    """Check digit for the first 12 digits, weights alternating 1 and 3."""
    checksum = sum((3 if i % 2 else 1) * int(digits[i]) for i in range(12))
    return (10 - checksum % 10) % 10


def isbn13_valid(isbn: str) -> bool:
    return int(isbn[12]) == isbn13_check_digit(isbn)
