"""
Masking helpers for stderr diagnostics.

Signer addresses and RPC URLs (which often embed provider API keys) are
shortened before they reach the log sink. Transaction and bundle hashes are
public and printed in full.
"""


def mask_address(address: str | None) -> str:
    """
    Shorten an account address to 0xd8dA...6045.

    Values shorter than ten characters are not addresses and become '***'.
    """
    if not address or len(address) < 10:
        return "***"
    return f"{address[:6]}...{address[-4:]}"


def mask_sensitive(value: str | None, show_chars: int = 4) -> str:
    """
    Hide the middle of a secret-bearing string.

    Args:
        value: String to mask, typically an endpoint URL
        show_chars: Characters kept at each end

    Returns:
        Masked string, or '***' when nothing would be hidden
    """
    if not value or len(value) <= show_chars * 2:
        return "***"
    return f"{value[:show_chars]}...{value[-show_chars:]}"
