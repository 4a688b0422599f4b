"""
PII (Personally Identifiable Information) masking utilities for logs.
"""

EMAIL_FIELDS = {"email", "customer_email"}
NAME_FIELDS = {"name", "customer_name"}
SECRET_FIELDS = {"token", "authorization", "bearer"}


def mask_email(email: str) -> str:
    """Mask email address."""
    if "@" not in email:
        return email
    local, domain = email.split("@", 1)
    if len(local) <= 2:
        masked = "**"
    else:
        masked = local[:2] + "*" * (len(local) - 2)
    return f"{masked}@{domain}"


def mask_name(name: str) -> str:
    """Mask name."""
    if len(name) <= 2:
        return "**"
    return name[0] + "*" * (len(name) - 2) + name[-1]


def mask_token(token: str | None) -> str | None:
    """Mask bearer token (show last 4 chars only)."""
    if not token:
        return None
    if len(token) <= 8:
        return "*" * len(token)
    return "****" + token[-4:]


def mask_pii_in_dict(data: dict) -> dict:
    """Mask PII in dictionary recursively."""
    masked = {}

    for key, value in data.items():
        key_lower = key.lower()

        if isinstance(value, dict):
            masked[key] = mask_pii_in_dict(value)
        elif isinstance(value, list):
            masked[key] = [mask_pii_in_dict(item) if isinstance(item, dict) else item for item in value]
        elif not isinstance(value, str):
            masked[key] = value
        elif key_lower in SECRET_FIELDS:
            masked[key] = mask_token(value)
        elif key_lower in EMAIL_FIELDS or "@" in value:
            masked[key] = mask_email(value)
        elif key_lower in NAME_FIELDS:
            masked[key] = mask_name(value)
        else:
            masked[key] = value

    return masked
