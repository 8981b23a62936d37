"""Notifier adapters."""

from erp_identity.infrastructure.notifications.http_notifier import HttpNotifier
from erp_identity.infrastructure.notifications.stub_notifier import StubNotifier

__all__ = ["HttpNotifier", "StubNotifier"]
