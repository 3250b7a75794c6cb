"""
Factory for a fully wired OrderLineService.
"""

from typing import Optional

from app.db.connection import ConnDB, get_db_connection
from app.db.repositories import OrderLineRepository, OrderRepository, ProductRepository
from app.services.order_lines.service import OrderLineService


def create_order_line_service(conn_db: Optional[ConnDB] = None) -> OrderLineService:
    """
    Build an OrderLineService backed by the database repositories.

    The connection must be initialized before the service is used.

    Args:
        conn_db: Database connection (defaults to the shared connection)

    Returns:
        OrderLineService: Service with its stores and session factory injected
    """
    conn_db = conn_db or get_db_connection()

    return OrderLineService(
        order_store=OrderRepository(conn_db),
        product_store=ProductRepository(conn_db),
        order_line_store=OrderLineRepository(conn_db),
        session_factory=conn_db.get_session,
    )
