"""Link registry: the lifecycle of tracked short links

The registry generates codes, persists link records through an injected DAO,
resolves codes under the validity rules (invalidation, expiration) and keeps
the per-link redirect counters.

Validity:
    A link is usable iff `is_valid` is True and its expiration date is either
    unset or not yet passed. Expiration is lazy: it's detected when `resolve()`
    touches an expired link, which is then persisted as invalid. Nothing sweeps
    expired links in the background.

Concurrency:
    The registry holds no locks and no state besides its configuration. Each
    DAO call is atomic on its own (see LinkBaseDAO), and redirect counters use
    the DAO's atomic increment. No operation writes a whole record back, so
    concurrent redirects never lose a count and an invalidated link stays invalid.
    Two concurrent `create()` calls for the same, not yet registered URL may
    both miss the lookup and insert two distinct valid links for that URL.

Example:
    >>> from linktracker.dao.memory import LinkMemoryDAO
    >>> registry = LinkRegistry(LinkMemoryDAO(), base_url='https://lnk.example.com')
    >>> link = registry.create('https://example.com/article/123')
    >>> registry.resolve(link.code).original_url
    'https://example.com/article/123'
    >>> registry.increment_redirect_count(link).redirect_count
    1
    >>> registry.invalidate(link.code)
    >>> registry.get_stats(link.code).is_valid
    False
"""

import hmac
import logging
import random
from dataclasses import replace
from datetime import datetime, UTC
from typing import Optional

from linktracker.models import LinkModel
from linktracker.dao.base import LinkBaseDAO
from linktracker.dao.exceptions import DataStoreError, RecordAlreadyExistsError, RecordNotFoundError
from linktracker.exceptions import CodeGenerationError, LinkForbiddenError, LinkNotFoundError
from linktracker.utils.helpers import as_utc, masked_link
from linktracker.utils.shortener import generate_code
from linktracker.utils.constants import DEFAULT_BASE_URL, DEFAULT_CODE_LENGTH, MAX_CODE_GENERATION_ATTEMPTS


logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = 'Link not found, invalid or expired'


class LinkRegistry:
    """Create, resolve, count, invalidate and report on links

    Args:
        dao (LinkBaseDAO):
            Storage for link records. Constructed once by the caller and shared.
        base_url (str):
            Public base URL the masked links are built from.
        code_length (int):
            Length of generated codes.
        max_attempts (int):
            How many codes to try when a generated code is already taken.
        rng (random.Random | None):
            Random source for code generation (defaults to the system RNG).
    """

    def __init__(
        self,
        dao: LinkBaseDAO,
        base_url: str = DEFAULT_BASE_URL,
        code_length: int = DEFAULT_CODE_LENGTH,
        max_attempts: int = MAX_CODE_GENERATION_ATTEMPTS,
        rng: Optional[random.Random] = None,
    ):
        if max_attempts < 1:
            raise ValueError(f'max_attempts must be a positive integer (given value: {max_attempts}).')

        self.dao = dao
        self.base_url = base_url
        self.code_length = code_length
        self.max_attempts = max_attempts
        self.rng = rng

    def create(
        self,
        original_url: str,
        password: Optional[str] = None,
        expiration_date: Optional[datetime] = None,
    ) -> LinkModel:
        """Register a link for original_url, or reuse the valid one that exists

        If a valid link for the URL exists, only its password and expiration date
        are patched in storage; code, counter and validity are left untouched. A
        link that has expired but wasn't resolved since is still valid, so it's
        reused as well. Otherwise a new link with a fresh code is inserted. The URL
        itself is not validated.

        Raises:
            CodeGenerationError:
                If every generated code was already taken.
            DataStoreError:
                If the DAO fails. Nothing is written in that case.
        """
        if expiration_date is not None:
            expiration_date = as_utc(expiration_date)

        existing = self.find_by_original_url(original_url)
        if existing is not None:
            updated = replace(existing, password=password, expiration_date=expiration_date)
            self.dao.update(existing.code, password=password, expiration_date=expiration_date)
            logger.debug('Reusing existing link.', extra={'code': updated.code})
            return updated

        for attempt in range(1, self.max_attempts + 1):
            code = generate_code(self.code_length, rng=self.rng)
            link = LinkModel(
                code=code,
                original_url=original_url,
                masked_link=masked_link(self.base_url, code),
                password=password,
                expiration_date=expiration_date,
                redirect_count=0,
                is_valid=True,
            )
            try:
                return self.dao.insert(link)
            except RecordAlreadyExistsError:
                logger.warning('Generated code is already taken.', extra={'code': code, 'attempt': attempt})

        raise CodeGenerationError(f'Could not generate an unused code in {self.max_attempts} attempts.')

    def resolve(self, code: str) -> LinkModel:
        """Return the usable link for code

        An expired link is persisted as invalid before failing. The password is
        not checked here (see `check_password()`).

        Raises:
            LinkNotFoundError:
                If the link doesn't exist, was invalidated, or has expired.
        """
        link = self.dao.find_one(code=code)
        if link is None or not link.is_valid:
            raise LinkNotFoundError(NOT_FOUND_MESSAGE)

        if link.is_expired(datetime.now(UTC)):
            try:
                self.invalidate(code)
            except DataStoreError:
                logger.warning('Failed to persist expiration of link.', extra={'code': code}, exc_info=True)
            raise LinkNotFoundError(NOT_FOUND_MESSAGE)

        return link

    def find_by_original_url(self, original_url: str) -> LinkModel | None:
        return self.dao.find_one(original_url=original_url, is_valid=True)

    def increment_redirect_count(self, link: LinkModel) -> LinkModel:
        """Count one redirect of an already resolved (and authorized) link

        Returns:
            LinkModel: copy of link carrying the stored counter after the increment.

        Raises:
            LinkNotFoundError:
                If the link's code isn't stored.
        """
        try:
            redirect_count = self.dao.increment_redirect_count(link.code)
        except RecordNotFoundError as e:
            raise LinkNotFoundError(NOT_FOUND_MESSAGE) from e
        return replace(link, redirect_count=redirect_count)

    def invalidate(self, code: str) -> None:
        """Mark the link as invalid. Unknown or already invalid codes are ignored."""
        if not self.dao.update(code, is_valid=False):
            logger.debug('Nothing to invalidate.', extra={'code': code})

    def get_stats(self, code: str) -> LinkModel:
        """Return the link record regardless of its validity or expiration

        Raises:
            LinkNotFoundError:
                If the code was never registered.
        """
        link = self.dao.find_one(code=code)
        if link is None:
            raise LinkNotFoundError(NOT_FOUND_MESSAGE)
        return link


def check_password(link: LinkModel, password: Optional[str]) -> None:
    """Authorize access to a resolved link

    Raises:
        LinkForbiddenError:
            If the link is password protected and the given password doesn't match.
    """
    if link.password is None:
        return
    if password is None or not hmac.compare_digest(link.password.encode(), password.encode()):
        raise LinkForbiddenError('Forbidden')
