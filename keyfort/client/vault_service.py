import logging
from datetime import datetime
from typing import Any, Dict, List, Optional
from ..core.crypto import DEFAULT_ITERATIONS, CryptoManager
from ..core.exceptions import DecryptionFailure
from ..core.models import AuditEntry, VaultEntry
from ..core.security import SecurityAnalysis, calculate_security_score
from .api import VaultApiClient

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = ("title", "username", "website", "notes", "category_id", "is_favorite")


class VaultService:
    """Client-side vault operations for one unlocked user.

    The passphrase is handed in by the caller and only ever used locally;
    the server receives ciphertext and never sees it.
    """

    def __init__(self, api: VaultApiClient, passphrase: str, iterations: int = DEFAULT_ITERATIONS):
        self.api = api
        self.crypto = CryptoManager(passphrase, iterations)

    def add_entry(self, entry: VaultEntry) -> Dict[str, Any]:
        payload = entry.model_dump(exclude={"password"})
        payload["encrypted_password"] = self.crypto.encrypt_text(entry.password)
        return self.api.create_item(payload)

    def update_entry(self, item: Dict[str, Any], new_password: Optional[str] = None, **changes) -> Dict[str, Any]:
        unknown = set(changes) - set(_EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")
        payload = {key: item.get(key) for key in _EDITABLE_FIELDS}
        payload.update(changes)
        # without a new password the stored ciphertext is kept as is
        if new_password:
            payload["encrypted_password"] = self.crypto.encrypt_text(new_password)
        else:
            payload["encrypted_password"] = item["encrypted_password"]
        return self.api.update_item(item["id"], payload)

    def reveal_password(self, item: Dict[str, Any]) -> str:
        return self.crypto.decrypt_text(item["encrypted_password"])

    def security_report(self, now: Optional[datetime] = None) -> SecurityAnalysis:
        entries: List[AuditEntry] = []
        for item in self.api.list_items():
            try:
                password: Optional[str] = self.reveal_password(item)
            except DecryptionFailure:
                logger.warning("Skipping vault item %s: could not decrypt", item["id"])
                password = None
            entries.append(AuditEntry(
                item_id=item["id"],
                title=item["title"],
                password=password,
                updated_at=item["updated_at"],
            ))
        return calculate_security_score(entries, now=now)
