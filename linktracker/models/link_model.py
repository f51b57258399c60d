from dataclasses import dataclass
from datetime import datetime, UTC
from typing import Any, Optional


@dataclass(frozen=True)
class LinkModel:
    """Represent a tracked short link.

    Attributes:
        code (str):
            The unique short identifier used in the public redirect path.
        original_url (str):
            The destination URL the code redirects to.
        masked_link (str):
            Full short URL (base URL + code). Stored for convenience only.
        password (Optional[str]):
            If set, visitors must supply it to be redirected.
        expiration_date (Optional[datetime]):
            UTC moment after which the link is no longer usable.
        redirect_count (int):
            Number of successful (authorized) redirects.
        is_valid (bool):
            Explicit invalidation flag, independent of expiration.

    Example:
        >>> link = LinkModel(
        ...     code='aBsJu',
        ...     original_url='https://example.com/article/123',
        ...     masked_link='http://localhost:3000/aBsJu',
        ... )
        >>> link.redirect_count
        0
        >>> link.is_usable()
        True
    """

    code: str
    original_url: str
    masked_link: str
    password: Optional[str] = None
    expiration_date: Optional[datetime] = None
    redirect_count: int = 0
    is_valid: bool = True

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """True if the expiration date lies strictly before `now` (defaults to current UTC time)."""
        if self.expiration_date is None:
            return False
        return self.expiration_date < (now or datetime.now(UTC))

    def is_usable(self, now: Optional[datetime] = None) -> bool:
        return self.is_valid and not self.is_expired(now)

    def to_dict(self) -> dict[str, Any]:
        """Public JSON-serializable representation (the password itself is never exposed)."""
        return {
            'code': self.code,
            'original_url': self.original_url,
            'masked_link': self.masked_link,
            'password_protected': self.password is not None,
            'expiration_date': self.expiration_date.isoformat() if self.expiration_date else None,
            'redirect_count': self.redirect_count,
            'is_valid': self.is_valid,
        }
