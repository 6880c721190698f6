"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.identity import Identity
from storefront.domain.service.order_lifecycle import OrderLifecycle
from storefront.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork
from storefront.infrastructure.settings import Settings


@dataclass(frozen=True)
class AppContext:
    """Everything a CLI command needs, built once per invocation."""

    settings: Settings
    uow: JsonUnitOfWork
    lifecycle: OrderLifecycle
    identity: Identity | None


def unit_of_work(settings: Settings) -> JsonUnitOfWork:
    return JsonUnitOfWork(
        settings.store_path,
        commit_timeout=settings.commit_timeout,
        stale_lock_after=settings.stale_lock_after,
    )


def order_lifecycle(settings: Settings) -> OrderLifecycle:
    return OrderLifecycle(restock_on_cancel=settings.restock_on_cancel)


def build_context(
    settings: Settings,
    user_id: str | None,
    role: str | None,
    email: str | None = None,
) -> AppContext:
    """Build the per-invocation context.

    The caller identity arrives already verified; without a user id the
    command runs anonymously.
    """
    identity = Identity(id=user_id, role=role or "", email=email) if user_id else None
    return AppContext(
        settings=settings,
        uow=unit_of_work(settings),
        lifecycle=order_lifecycle(settings),
        identity=identity,
    )
