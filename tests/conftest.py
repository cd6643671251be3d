"""
Shared pytest fixtures for testing
"""

import pytest

from schema_diagram.core.config import DiagramOptions
from schema_diagram.core.models import Column, ForeignKey, Relationship, Table


@pytest.fixture
def options():
    """Default diagram options"""
    return DiagramOptions()


@pytest.fixture
def wide_options():
    """Options with enough spacing that anchors sit outside neighbouring buffers"""
    return DiagramOptions(table_padding=200)


@pytest.fixture
def customers_table():
    return Table(
        name='customers',
        columns=[
            Column('id', 'integer', nullable=False),
            Column('name', 'varchar(255)'),
        ],
        primary_keys=['id'],
    )


@pytest.fixture
def orders_table():
    return Table(
        name='orders',
        columns=[
            Column('id', 'integer', nullable=False),
            Column('customer_id', 'integer', nullable=False),
        ],
        primary_keys=['id'],
        foreign_keys=[ForeignKey('customer_id', 'customers', 'id', 'fk_orders_customer')],
    )


@pytest.fixture
def payments_table():
    return Table(
        name='payments',
        columns=[
            Column('id', 'integer', nullable=False),
            Column('amount', 'numeric(10,2)'),
            Column('paid_at', 'timestamp with time zone'),
            Column('method', 'varchar(20)'),
        ],
        primary_keys=['id'],
    )


@pytest.fixture
def audit_log_table():
    return Table(name='audit_log', columns=[Column('id', 'bigint')], primary_keys=['id'])


@pytest.fixture
def order_customer_relationship():
    return Relationship('orders', 'customer_id', 'customers', 'id', 'fk_orders_customer')
