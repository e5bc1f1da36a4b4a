# src/request_logger/utils/sanitizer.py
"""
Masking of sensitive values in logged request details.

Applied to the query/params/body details appended to completion lines so
that passwords, tokens and API keys do not end up in log files.
"""

from typing import Any, Dict

REDACTED = "***REDACTED***"

# Sensitive key fragments (case-insensitive, substring match).
# Extend with add_sensitive_keys().
SENSITIVE_KEYS = {
    # Passwords
    'password', 'passwd', 'pwd',
    # Tokens
    'token', 'jwt',
    # Secrets and keys
    'secret', 'api_key', 'apikey', 'private_key',
    # Authentication
    'authorization', 'auth_', 'credentials',
    # Sessions and cookies
    'cookie', 'session', 'csrf', 'xsrf',
    # Payment data
    'credit_card', 'card_number', 'cvv', 'cvc', 'ssn',
    # One-time codes
    'otp', 'pin_code', 'mfa_code',
}


def mask_sensitive_data(data: Any, mask: str = REDACTED) -> Any:
    """
    Recursively mask sensitive values in dicts and lists.

    Returns a copy; the input is not modified. Scalars and unknown
    objects are returned as is.

    Args:
        data: Details to mask (dict, list, or any other value)
        mask: Replacement string

    Returns:
        Copy of the data with sensitive values replaced

    Examples:
        >>> mask_sensitive_data({"email": "a@b.c", "password": "hunter2"})
        {'email': 'a@b.c', 'password': '***REDACTED***'}

        >>> mask_sensitive_data({"query": {"access_token": "abc", "page": "2"}})
        {'query': {'access_token': '***REDACTED***', 'page': '2'}}
    """
    if isinstance(data, dict):
        return _mask_dict(data, mask)

    if isinstance(data, (list, tuple)):
        return type(data)(mask_sensitive_data(item, mask) for item in data)

    return data


def _mask_dict(data: Dict[Any, Any], mask: str) -> Dict[Any, Any]:
    result = {}

    for key, value in data.items():
        if is_sensitive_key(str(key)):
            result[key] = mask
        else:
            result[key] = mask_sensitive_data(value, mask)

    return result


def is_sensitive_key(key: str) -> bool:
    """True if the key contains any registered sensitive fragment."""
    key = key.lower()
    return any(fragment in key for fragment in SENSITIVE_KEYS)


def add_sensitive_keys(*keys: str) -> None:
    """
    Register additional sensitive key fragments.

    Examples:
        >>> add_sensitive_keys('internal_ref')
        >>> mask_sensitive_data({"internal_ref": "x"})
        {'internal_ref': '***REDACTED***'}
    """
    for key in keys:
        SENSITIVE_KEYS.add(key.lower())


def remove_sensitive_keys(*keys: str) -> None:
    """Unregister sensitive key fragments."""
    for key in keys:
        SENSITIVE_KEYS.discard(key.lower())
