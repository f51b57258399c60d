"""In-memory implementation of LinkBaseDAO

Keeps link records in a process-local dict guarded by a lock, so every DAO
method is atomic with respect to concurrent threads. Used for local runs
and tests; records are lost when the process exits.
"""

import threading
from dataclasses import replace as copy_with
from typing import Any

from beartype import beartype

from linktracker.models import LinkModel
from linktracker.dao.base import LinkBaseDAO
from linktracker.dao.exceptions import RecordAlreadyExistsError, RecordNotFoundError


class LinkMemoryDAO(LinkBaseDAO):
    """Dict-backed link DAO

    Internal schema:
        self._links = {
            code: LinkModel(...),
        }
    """

    def __init__(self):
        self._links: dict[str, LinkModel] = {}
        self._lock = threading.Lock()

    @beartype
    def insert(self, link: LinkModel, **kwargs) -> LinkModel:
        with self._lock:
            if link.code in self._links:
                raise RecordAlreadyExistsError(f"Link with code '{link.code}' already exists.")
            self._links[link.code] = link
        return link

    @beartype
    def find_one(self, **criteria: Any) -> LinkModel | None:
        self._check_fields(criteria)

        with self._lock:
            if 'code' in criteria:
                candidates = [self._links[criteria['code']]] if criteria['code'] in self._links else []
            else:
                candidates = [self._links[code] for code in sorted(self._links)]

        for link in candidates:
            if all(getattr(link, name) == value for name, value in criteria.items()):
                return link
        return None

    @beartype
    def update(self, code: str, **fields: Any) -> bool:
        self._check_fields(fields, allow_code=False)
        if not fields:
            raise ValueError('At least one field must be given to update a link.')

        with self._lock:
            if code not in self._links:
                return False
            self._links[code] = copy_with(self._links[code], **fields)
        return True

    @beartype
    def increment_redirect_count(self, code: str, **kwargs) -> int:
        with self._lock:
            if code not in self._links:
                raise RecordNotFoundError(f"Link with code '{code}' not found.")
            link = self._links[code]
            self._links[code] = copy_with(link, redirect_count=link.redirect_count + 1)
            return link.redirect_count + 1
