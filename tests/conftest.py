"""conftest.py
Shared pytest hooks and fixtures.
"""

import pytest
from follio.logging import LoggerFactory
from follio.ingestion.sample_ingestor import SampleIngestor
from follio.gateways.identity_provider import InMemoryIdentityProvider
from follio.gateways.persistence_gateway import InMemoryPersistenceGateway
from follio.flow.page_flow_controller import PageFlowController

# --------------------------------------------------------------
# SETUP TEST LOGGING
# --------------------------------------------------------------

# Integrate logger with pytest
logger = LoggerFactory().get_logger(
    name="pytest_logger",
    logger_type="pytest",
    console=True
)
current_class = None

@pytest.hookimpl(tryfirst=True)
def pytest_sessionstart(session):
    """Session start header."""
    logger.info("==== PYTEST SESSION START ====")

@pytest.hookimpl(tryfirst=True)
def pytest_runtest_logstart(nodeid, location):
    """Called at the start of each test."""
    global current_class
    class_name = location[0]
    if class_name != current_class:
        current_class = class_name
        logger.info(f"\n---- TestClass: {current_class} ----")

@pytest.hookimpl(tryfirst=True)
def pytest_runtest_logreport(report):
    """Called at the end of each test phase (setup/call/teardown)."""
    if report.when != "call":
        return  # only care about the main call, not setup/teardown

    status = report.outcome.upper()  # PASSED / FAILED / SKIPPED
    if status == "PASSED":
        logger.info(f"PASSED: {report.nodeid}")
    elif status == "FAILED":
        logger.error(f"FAILED: {report.nodeid}\n{report.longreprtext}")
    elif status == "SKIPPED":
        logger.warning(f"SKIPPED: {report.nodeid}\n{report.longreprtext}")

@pytest.hookimpl(tryfirst=True)
def pytest_sessionfinish(session, exitstatus):
    """Session finish footer."""
    logger.info(f"==== PYTEST SESSION END: exitstatus={exitstatus} ====")


# --------------------------------------------------------------
# SHARED FIXTURES
# --------------------------------------------------------------
@pytest.fixture
def identity_provider():
    """In-memory identity provider with no accounts and no session."""
    return InMemoryIdentityProvider()


@pytest.fixture
def persistence_gateway():
    """Empty in-memory record store."""
    return InMemoryPersistenceGateway()


@pytest.fixture
def make_controller(identity_provider, persistence_gateway):
    """
    Factory for PageFlowControllers wired to the in-memory collaborators.

    Parse delay is zero so tests never sleep. Any keyword overrides the default.

    Usage:
        def test_example(make_controller):
            controller = make_controller(ingestor=ExplodingIngestor())
    """
    def factory(**kwargs):
        kwargs.setdefault("identity_provider", identity_provider)
        kwargs.setdefault("persistence_gateway", persistence_gateway)
        kwargs.setdefault("ingestor", SampleIngestor())
        kwargs.setdefault("parse_delay_seconds", 0)
        return PageFlowController(**kwargs)
    return factory
