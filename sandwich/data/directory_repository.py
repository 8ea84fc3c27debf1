"""Repositories for the host, contact and recipient directories."""

from __future__ import annotations

from ..models import Contact, Host, Recipient
from .base_repository import PocketBaseRepository


class HostRepository(PocketBaseRepository[Host]):
    """Repository for collection site hosts"""

    collection_name = "hosts"
    model = Host

    def get_names(self) -> set[str]:
        return {host.name for host in self.get_all()}


class ContactRepository(PocketBaseRepository[Contact]):
    """Repository for directory contacts"""

    collection_name = "contacts"
    model = Contact


class RecipientRepository(PocketBaseRepository[Recipient]):
    """Repository for sandwich recipients"""

    collection_name = "recipients"
    model = Recipient
