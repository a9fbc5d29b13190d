"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.escrow.app.command import (
    create_order_use_case,
    issue_refund_use_case,
    refund_event_orders_use_case,
    release_escrow_use_case,
)
from src.service.escrow.app.query import (
    get_order_use_case,
    list_event_refunds_use_case,
    list_refunds_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    create_order_use_case,
    release_escrow_use_case,
    issue_refund_use_case,
    get_order_use_case,
    list_refunds_use_case,
    refund_event_orders_use_case,
    list_event_refunds_use_case,
]
