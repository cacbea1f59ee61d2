#
# Pytest Fixtures
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from embcon.console import EmbeddedConsole
from embcon.inspector import Inspector
from embcon.markup import Markup
from embcon.options import ConsoleOptions, reset_options
from embcon.surface import MemorySurface


# Fixtures -------------------------------------------------------------------------------------------------------------

class FakeClock:
    """Manually advanced clock, in seconds."""

    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def default_options():
    """Keep module-level options isolated between tests."""
    reset_options()
    yield
    reset_options()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def surface() -> MemorySurface:
    return MemorySurface()


@pytest.fixture
def console(surface, clock) -> EmbeddedConsole:
    """Plain-text console on an in-memory surface."""
    return EmbeddedConsole(surface, ConsoleOptions.plain(), clock=clock)


@pytest.fixture
def html_console(surface, clock) -> EmbeddedConsole:
    """HTML console on an in-memory surface."""
    return EmbeddedConsole(surface, ConsoleOptions.html(), clock=clock)


@pytest.fixture
def inspector() -> Inspector:
    return Inspector()


@pytest.fixture
def html_inspector() -> Inspector:
    return Inspector(markup=Markup.html())
