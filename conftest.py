"""Configures pytest further, gating the long running reconstruction tests."""
import pytest

SCENARIO_N = 19122025
SCENARIO_MODULI = (32, 12, 28, 77, 93, 121, 17, 711)


def pytest_addoption(parser):
    parser.addoption("--skip-slow", action="store_true", default=False, help="skip slower reconstruction tests")
    parser.addoption("--run-extreme",
                     action="store_true",
                     default=False,
                     help="run reconstruction tests on extreme operand sizes")


def pytest_collection_modifyitems(config, items):
    gates = {
        "slow": (config.getoption("--skip-slow"), "Slow test: needs no --skip-slow option"),
        "extreme": (not config.getoption("--run-extreme"), "Extreme test: needs --run-extreme option"),
    }
    skipdict = {k: pytest.mark.skip(reason=reason) for k, (active, reason) in gates.items() if active}
    if not skipdict:
        return
    for item in items:
        for k, v in skipdict.items():
            if k in item.keywords:
                item.add_marker(v)


@pytest.fixture
def scenario() -> tuple[int, tuple[int, ...]]:
    """The number 19122025 and the moduli it is reconstructed from, shared moduli included."""
    return SCENARIO_N, SCENARIO_MODULI
