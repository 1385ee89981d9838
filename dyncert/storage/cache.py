"""Hostname-keyed cache of issued certificates (optional, off by default)."""

import datetime
import threading
from collections import OrderedDict
from typing import Optional

from dyncert.common.protocol import IssuedCertificate


class CertificateCache:
    """
    LRU map hostname -> IssuedCertificate.

    An entry is served only while now < notAfter and only for the key pair
    generation it was issued under, so re-keying invalidates everything.
    """

    def __init__(self, max_entries: int = 1024):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self._entries = OrderedDict()
        self._lock = threading.Lock()

    def get(self, hostname: str, generation: int,
            now: Optional[datetime.datetime] = None) -> Optional[IssuedCertificate]:
        if now is None:
            now = datetime.datetime.now(datetime.timezone.utc)
        with self._lock:
            entry = self._entries.get(hostname)
            if entry is None:
                return None
            entry_generation, issued = entry
            if entry_generation != generation or now >= issued.not_after:
                del self._entries[hostname]
                return None
            self._entries.move_to_end(hostname)
            return issued

    def put(self, hostname: str, generation: int, issued: IssuedCertificate):
        with self._lock:
            self._entries[hostname] = (generation, issued)
            self._entries.move_to_end(hostname)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)

    def clear(self):
        with self._lock:
            self._entries.clear()

    def __len__(self):
        with self._lock:
            return len(self._entries)
