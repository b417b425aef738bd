# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Password hashing and verification using bcrypt.

Assumptions:
- bcrypt is the only supported algorithm
- Each hash includes a unique random salt
- Hash strings are opaque; only bcrypt interprets them
"""
import bcrypt

MIN_COST = 4
MAX_COST = 31
DEFAULT_COST = 10
MAX_PASSWORD_BYTES = 72


class HashingError(Exception):
    """Raised when bcrypt cannot produce a hash for the given input."""


class MalformedHashError(Exception):
    """Raised when a hash string is not a recognised bcrypt hash."""


def hash_password(password: str, cost: int) -> str:
    """Hash a password using bcrypt at the given cost.
    
    Args:
        password: Plain text password
        cost: bcrypt work factor (log2 of the round count)
        
    Returns:
        str: Hash string with algorithm version, cost, salt and digest
        
    Raises:
        HashingError: If the cost is above MAX_COST, the password is
            longer than MAX_PASSWORD_BYTES, or bcrypt rejects the password
        
    Assumptions:
    - Costs below MIN_COST fall back to DEFAULT_COST
    - Long passwords are refused, never truncated
    - Each call generates a unique hash (random salt)
    """
    if cost < MIN_COST:
        cost = DEFAULT_COST
    if cost > MAX_COST:
        raise HashingError(f"cost {cost} is above the maximum of {MAX_COST}")
    
    password_bytes = password.encode('utf-8')
    if len(password_bytes) > MAX_PASSWORD_BYTES:
        raise HashingError(f"password is longer than {MAX_PASSWORD_BYTES} bytes")
    
    try:
        salt = bcrypt.gensalt(rounds=cost)
        hashed = bcrypt.hashpw(password_bytes, salt)
    except ValueError as e:
        raise HashingError(str(e)) from e
    return hashed.decode('utf-8')


def check_password(password: str, password_hash: str) -> bool:
    """Check a password against a bcrypt hash.
    
    Args:
        password: Plain text password to verify
        password_hash: Hash string previously returned by hash_password
        
    Returns:
        bool: True if the password matches, False otherwise
        
    Raises:
        MalformedHashError: If password_hash is not a bcrypt hash or the
            password cannot be checked against it
        
    Assumptions:
    - Comparison is constant-time (done inside bcrypt)
    """
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError as e:
        raise MalformedHashError(str(e)) from e
