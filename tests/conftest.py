"""
Pytest configuration and fixtures for retail-sales-pipeline tests

This module provides shared fixtures for unit and integration tests.
"""
import os
import shutil
from decimal import Decimal
from typing import Generator

import pytest

from retail_pipeline.core.models import RawRecord


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external services"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that require Spark or Docker containers"
    )


# =======================
# RECORD FIXTURES
# =======================

def make_raw(**overrides) -> RawRecord:
    """Build a valid raw record, overriding selected fields."""
    values = {
        "invoice_number": "536365",
        "stock_code": "85123A",
        "description": "WHITE HANGING HEART T-LIGHT HOLDER",
        "quantity": 6,
        "invoice_date": "12/1/2010 8:26",
        "unit_price": Decimal("2.55"),
        "customer_id": "17850",
        "country": "United Kingdom",
    }
    values.update(overrides)
    return RawRecord(**values)


@pytest.fixture
def raw_record_factory():
    """Factory for raw records with sensible valid defaults"""
    return make_raw


@pytest.fixture(scope="session")
def test_data_dir() -> str:
    """
    Get path to test data fixtures directory

    Returns:
        Path to tests/fixtures directory
    """
    return os.path.join(os.path.dirname(__file__), "fixtures")


@pytest.fixture(scope="session")
def sample_csv_path(test_data_dir) -> str:
    """Nine-row extract of the online retail dataset with every kind of bad row"""
    return os.path.join(test_data_dir, "online_retail_sample.csv")


@pytest.fixture
def sample_raw_records() -> list[RawRecord]:
    """
    The rows of online_retail_sample.csv as RawRecords.

    Five survive cleaning; the others are a cancellation (also a return),
    a missing customer, a zero quantity and a zero price.
    """
    return [
        make_raw(),
        make_raw(stock_code="71053", description="WHITE METAL LANTERN", unit_price=Decimal("3.39")),
        make_raw(invoice_number="C536379", stock_code="D", description="Discount", quantity=-1,
                 invoice_date="12/1/2010 9:41", unit_price=Decimal("27.50"), customer_id="14527"),
        make_raw(invoice_number="536380", stock_code="22961", description="JAM MAKING SET PRINTED",
                 quantity=24, invoice_date="12/1/2010 9:41", unit_price=Decimal("1.45"),
                 customer_id="17809", country="France"),
        make_raw(invoice_number="536381", stock_code="22139", description="RETROSPOT TEA SET CERAMIC 11 PC",
                 quantity=3, invoice_date="1/5/2011 10:15", unit_price=Decimal("4.95"), customer_id=None),
        make_raw(invoice_number="536382", stock_code="22086", description="PAPER CHAIN KIT 50'S CHRISTMAS",
                 quantity=0, invoice_date="1/5/2011 10:20", unit_price=Decimal("2.95"), customer_id="15311"),
        make_raw(invoice_number="536383", stock_code="22423", description=None, quantity=2,
                 invoice_date="1/6/2011 11:00", unit_price=Decimal("0.00"), customer_id="15311",
                 country="Germany"),
        make_raw(invoice_number="536384", stock_code="22423", description=None, quantity=4,
                 invoice_date="11/7/2011 12:00", unit_price=Decimal("12.75"), customer_id="12583",
                 country="France"),
        make_raw(invoice_number="536385", stock_code="POST", description="POSTAGE", quantity=1,
                 invoice_date="11/7/2011 12:05", unit_price=Decimal("18.00"), customer_id="12583",
                 country="France"),
    ]


# =======================
# SPARK FIXTURES
# =======================

@pytest.fixture(scope="session")
def spark_session():
    """
    Create a Spark session for testing with local mode

    Skips when no Java runtime is available.
    """
    if shutil.which("java") is None and not os.getenv("JAVA_HOME"):
        pytest.skip("Spark tests require a Java runtime")

    from pyspark.sql import SparkSession

    spark = (
        SparkSession.builder
        .appName("retail-pipeline-test")
        .master("local[1]")
        .config("spark.sql.shuffle.partitions", "1")
        .config("spark.ui.enabled", "false")  # Disable UI for tests
        .getOrCreate()
    )
    spark.sparkContext.setLogLevel("WARN")

    yield spark

    spark.stop()


# =======================
# DATABASE FIXTURES (Testcontainers)
# =======================

@pytest.fixture(scope="session")
def postgres_container():
    """
    Start PostgreSQL container for integration tests

    Skips when Docker is not reachable.
    """
    from testcontainers.postgres import PostgresContainer

    container = PostgresContainer(
        image="postgres:16.2-alpine",
        username="test_retail",
        password="test_password",
        dbname="test_online_retail",
    )
    try:
        container.start()
    except Exception as e:
        pytest.skip(f"PostgreSQL container unavailable: {e}")

    yield container

    container.stop()


@pytest.fixture
def db_pool(postgres_container) -> Generator:
    """
    Open connection pool against the test container

    Yields:
        DatabaseConnectionPool
    """
    from retail_pipeline.warehouse import DatabaseConnectionPool

    pool = DatabaseConnectionPool(
        host=postgres_container.get_container_host_ip(),
        port=int(postgres_container.get_exposed_port(5432)),
        database="test_online_retail",
        user="test_retail",
        password="test_password",
    )
    pool.open()
    yield pool
    pool.close()
